"""Tests for fzmedia.log_config.setup_logging: file and stderr handlers."""

import logging

import pytest

from fzmedia import log_config


@pytest.fixture
def fresh_logger(tmp_path, monkeypatch):
    monkeypatch.setattr(log_config.tempfile, 'gettempdir', lambda: str(tmp_path))
    logger = logging.getLogger('fzmedia')
    yield logger
    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)


class TestSetupLogging:
    def test_log_file_in_temp_dir(self, tmp_path, fresh_logger):
        log_config.setup_logging()
        assert log_config.LOG_FILE_PATH == str(tmp_path / 'fzmedia' / 'fzmedia.log')
        logging.getLogger('fzmedia.navigator').debug('browsing %s', '/srv/media')
        for h in fresh_logger.handlers:
            h.flush()
        text = (tmp_path / 'fzmedia' / 'fzmedia.log').read_text(encoding='utf-8')
        assert '[DEBUG] fzmedia.navigator: browsing /srv/media' in text

    def test_stderr_quiet_by_default(self, fresh_logger):
        log_config.setup_logging()
        levels = {type(h): h.level for h in fresh_logger.handlers}
        assert levels[logging.FileHandler] == logging.DEBUG
        assert levels[logging.StreamHandler] == logging.WARNING

    def test_verbose_stderr(self, fresh_logger):
        log_config.setup_logging(verbose=True)
        levels = {type(h): h.level for h in fresh_logger.handlers}
        assert levels[logging.StreamHandler] == logging.INFO

    def test_repeat_setup_does_not_stack_handlers(self, fresh_logger):
        log_config.setup_logging()
        log_config.setup_logging()
        assert len(fresh_logger.handlers) == 2

    def test_unwritable_temp_dir_keeps_stderr(self, tmp_path, fresh_logger, monkeypatch):
        blocker = tmp_path / 'file'
        blocker.write_text('x')
        monkeypatch.setattr(log_config.tempfile, 'gettempdir', lambda: str(blocker))
        log_config.setup_logging()
        assert [type(h) for h in fresh_logger.handlers] == [logging.StreamHandler]
        assert log_config.LOG_FILE_PATH is None
