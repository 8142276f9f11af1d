"""Continue-watching cache: one saved M3U per in-progress item (no UI beyond the opt-in prompt)."""

from __future__ import annotations

import logging
import os

from fzmedia.listing import Entry, EntryKind
from fzmedia.options import ASCEND, Option
from fzmedia.picker import Picker
from fzmedia.playlist import PLAYLIST_SUFFIX, PlaybackQueue, write_atomic

log = logging.getLogger(__name__)

DECLINE = "don't add to continue watching"
ACCEPT = "add to continue watching"


class ResumeCache:
    """Slots are <cache_dir>/<name>.m3u; every write replaces the slot atomically."""

    def __init__(self, cache_dir: str, picker: Picker | None = None) -> None:
        self._dir = cache_dir
        self._picker = picker

    @property
    def cache_dir(self) -> str:
        return self._dir

    def slot_path(self, name: str) -> str:
        return os.path.join(self._dir, name)

    def _is_slot_name(self, name: str) -> bool:
        return (
            bool(name)
            and name.endswith(PLAYLIST_SUFFIX)
            and os.path.basename(name) == name
            and not name.startswith(".")
        )

    def names(self) -> list[str]:
        try:
            files = os.listdir(self._dir)
        except OSError:
            return []
        return sorted(
            f for f in files
            if self._is_slot_name(f) and os.path.isfile(self.slot_path(f))
        )

    def is_empty(self) -> bool:
        return not self.names()

    def list(self) -> list[Option]:
        """Slots as picker options, followed by the up sentinel."""
        options: list[Option] = [Entry(n, EntryKind.RESUME_ARTIFACT) for n in self.names()]
        options.append(ASCEND)
        return options

    def read(self, name: str) -> PlaybackQueue:
        with open(self.slot_path(name), encoding="utf-8", errors="surrogateescape") as f:
            return PlaybackQueue.parse(f.read())

    def write(self, name: str, queue: PlaybackQueue) -> None:
        write_atomic(self.slot_path(name), queue.render())

    def offer(self, queue: PlaybackQueue, original_name: str) -> bool:
        """Ask whether to keep queue for later; returns True if a slot was written."""
        if not queue or self._picker is None:
            return False
        result = self._picker.pick([DECLINE, ACCEPT])
        if not result.ok or result.choice != ACCEPT:
            return False
        stem = os.path.splitext(os.path.basename(original_name.rstrip("/")))[0]
        name = stem + PLAYLIST_SUFFIX
        os.makedirs(self._dir, exist_ok=True)
        self.write(name, queue)
        log.info("Added %s to continue watching", name)
        return True

    def remove(self, name: str) -> bool:
        """Delete a slot. Unknown names and the up sentinel are ignored (returns False)."""
        if name == ASCEND.label or not self._is_slot_name(name):
            return False
        try:
            os.remove(self.slot_path(name))
        except FileNotFoundError:
            return False
        log.info("Removed %s from continue watching", name)
        return True
