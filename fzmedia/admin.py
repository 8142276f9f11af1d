"""Refuse to run from a privileged (root / Administrator) account."""

import os
import sys

REFUSAL_MESSAGE = "Do not run fzmedia as root. Aborting."


def is_privileged() -> bool:
    """True when running as root on POSIX or as an elevated admin on Windows."""
    if sys.platform == 'win32':
        try:
            import ctypes
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except (AttributeError, OSError):
            return False
    return os.geteuid() == 0
