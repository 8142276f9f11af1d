"""Tests for the picker and launcher wrappers around external commands."""

import shlex
import sys

import pytest

from fzmedia import admin
from fzmedia.launcher import NOT_FOUND, run_tool
from fzmedia.picker import Picker


def _py(code):
    return shlex.join([sys.executable, '-c', code])


class TestPicker:
    def test_first_line_chosen(self):
        picker = Picker(_py('import sys; print(sys.stdin.readline().strip())'))
        r = picker.pick(['one', 'two'])
        assert r.ok
        assert r.choice == 'one'

    def test_non_zero_status_is_cancel(self):
        r = Picker(_py('import sys; sys.exit(130)')).pick(['one'])
        assert not r.ok

    def test_missing_binary_is_cancel(self):
        r = Picker('definitely-not-a-picker-xyz').pick(['one'])
        assert not r.ok
        assert r.choice == ''

    def test_empty_command_is_cancel(self):
        assert not Picker('').pick(['one']).ok


class TestRunTool:
    def test_success(self):
        r = run_tool(_py('import sys; sys.exit(0)'))
        assert r.ok

    def test_arguments_appended(self, tmp_path):
        out = tmp_path / 'out.txt'
        code = 'import sys; open(sys.argv[1], "w").write("ran")'
        r = run_tool(_py(code), str(out))
        assert r.ok
        assert out.read_text() == 'ran'
        assert r.argv[-1] == str(out)

    def test_failure_returned(self):
        r = run_tool(_py('import sys; sys.exit(3)'))
        assert not r.ok
        assert r.returncode == 3

    def test_missing_binary(self):
        r = run_tool('definitely-not-a-player-xyz', 'list.m3u')
        assert r.returncode == NOT_FOUND

    def test_empty_command(self):
        assert run_tool('', 'list.m3u').returncode == NOT_FOUND


@pytest.mark.skipif(sys.platform == 'win32', reason='POSIX uid check')
class TestIsPrivileged:
    def test_root(self, monkeypatch):
        monkeypatch.setattr(admin.os, 'geteuid', lambda: 0)
        assert admin.is_privileged()

    def test_regular_user(self, monkeypatch):
        monkeypatch.setattr(admin.os, 'geteuid', lambda: 1000)
        assert not admin.is_privileged()


class TestPickerUndecodableLabels:
    def test_label_passes_through(self):
        label = 'caf\udce9.mkv'
        echo = 'import sys; sys.stdout.buffer.write(sys.stdin.buffer.readline())'
        r = Picker(_py(echo)).pick([label, 'b.mkv'])
        assert r.ok
        assert r.choice == label
