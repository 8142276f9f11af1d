"""Run the video player, resume player or download tool on a playlist file."""

import logging
import shlex
import subprocess
from dataclasses import dataclass

log = logging.getLogger(__name__)

# Shell convention for "command not found"
NOT_FOUND = 127


@dataclass(frozen=True)
class ToolResult:
    argv: tuple[str, ...]
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_tool(command: str, *args: str) -> ToolResult:
    """Run command (a shell-quoted string) with args appended; wait for it and return its status."""
    base = tuple(shlex.split(command))
    argv = base + args
    if not base:
        log.error("No command configured")
        return ToolResult(argv, NOT_FOUND)
    log.info("Running %s", shlex.join(argv))
    try:
        r = subprocess.run(argv)
    except OSError as e:
        log.error("Cannot run %r: %s", command, e)
        return ToolResult(argv, NOT_FOUND)
    if r.returncode != 0:
        log.warning("%s exited with status %d", argv[0], r.returncode)
    return ToolResult(argv, r.returncode)
