"""Configure application logging to a file and stderr."""

import logging
import os
import sys
import tempfile

# Set by setup_logging(); path of the current log file.
LOG_FILE_PATH: str | None = None


def setup_logging(verbose: bool = False) -> None:
    """Configure the fzmedia logger: DEBUG file in the temp dir + stderr at WARNING (INFO with verbose)."""
    root = logging.getLogger("fzmedia")
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        h.close()
        root.removeHandler(h)

    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    global LOG_FILE_PATH
    LOG_FILE_PATH = None
    log_path = None
    try:
        log_dir = os.path.join(tempfile.gettempdir(), "fzmedia")
        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.join(log_dir, "fzmedia.log")
        LOG_FILE_PATH = log_path
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)
    except OSError:
        pass

    # The picker owns the terminal; keep stderr to problems unless asked.
    eh = logging.StreamHandler(sys.stderr)
    eh.setLevel(logging.INFO if verbose else logging.WARNING)
    eh.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root.addHandler(eh)

    root.debug("Logging started; file: %s", log_path or "(none)")
