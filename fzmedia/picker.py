"""Run the external fuzzy picker (fzy, fzf, dmenu, ...) over a list of lines."""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Sequence

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickResult:
    choice: str
    ok: bool


class Picker:
    """Feeds options on stdin and reads the chosen line from stdout."""

    def __init__(self, command: str) -> None:
        self.command = command

    def pick(self, options: Sequence[str]) -> PickResult:
        """Any non-zero exit status (Esc, Ctrl-C, no match) is reported as ok=False."""
        argv = shlex.split(self.command)
        if not argv:
            log.error("No picker command configured")
            return PickResult("", False)
        try:
            r = subprocess.run(
                argv,
                input="".join(o + "\n" for o in options),
                stdout=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="surrogateescape",
            )
        except OSError as e:
            log.error("Cannot run picker %r: %s", self.command, e)
            return PickResult("", False)
        lines = r.stdout.splitlines()
        choice = lines[0] if lines else ""
        return PickResult(choice, r.returncode == 0)
