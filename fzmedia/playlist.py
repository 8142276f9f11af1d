"""Playback queue (M3U) state, rendering and the playlist builder (no UI)."""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Callable, Iterable

from fzmedia.locations import join_location, parent_location

log = logging.getLogger(__name__)

HEADER = "#EXTM3U"
MARKER = "#EXTINF:-1,"
PLAYLIST_SUFFIX = ".m3u"

MEDIA_EXTENSIONS = (
    "mkv", "mp4", "avi", "webm", "flv", "mov", "wmv", "m4v",
    "mp3", "flac", "wav", "aac", "ogg", "m4a", "gif",
)
_MEDIA_SUFFIXES = tuple("." + ext for ext in MEDIA_EXTENSIONS)


def is_media(name: str) -> bool:
    return name.lower().endswith(_MEDIA_SUFFIXES)


def is_playlist(name: str) -> bool:
    return name.lower().endswith(PLAYLIST_SUFFIX)


class PlaybackQueue:
    """Ordered list of absolute media locators (paths or URLs)."""

    def __init__(self, locators: Iterable[str] = ()) -> None:
        self._locators: list[str] = list(locators)

    @classmethod
    def parse(cls, text: str) -> PlaybackQueue:
        """Read a rendered queue back (full or download-ready variant)."""
        locators = []
        for line in text.splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                locators.append(line)
        return cls(locators)

    def locators(self) -> list[str]:
        return list(self._locators)

    def first(self) -> str | None:
        return self._locators[0] if self._locators else None

    def truncate(self, anchor: str) -> PlaybackQueue:
        """Queue starting at the first locator equal to anchor; empty if anchor is absent."""
        try:
            index = self._locators.index(anchor)
        except ValueError:
            return PlaybackQueue()
        return PlaybackQueue(self._locators[index:])

    def parents(self) -> list[str]:
        """Distinct parent locations of the locators, in first-seen order."""
        seen: list[str] = []
        for locator in self._locators:
            parent = parent_location(locator)
            if parent not in seen:
                seen.append(parent)
        return seen

    def render(self) -> str:
        lines = [HEADER]
        for locator in self._locators:
            lines.append(MARKER)
            lines.append(locator)
        return "\n".join(lines) + "\n"

    def render_download(self) -> str:
        """Locator lines only, for download tools that read a URL list."""
        return "".join(locator + "\n" for locator in self._locators)

    def __len__(self) -> int:
        return len(self._locators)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlaybackQueue):
            return NotImplemented
        return self._locators == other._locators

    def __repr__(self) -> str:
        return f"PlaybackQueue({self._locators!r})"


def queue_from_names(location: str, names: Iterable[str]) -> PlaybackQueue:
    """Keep media names (in order) and turn them into locators under location."""
    return PlaybackQueue(join_location(location, name) for name in names if is_media(name))


def write_atomic(path: str, text: str) -> None:
    """Replace path with text; readers see either the old or the new content.
    Undecodable file-name bytes (surrogate escapes from os.scandir) are written back as the original bytes.
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def build_playlist(
    location: str,
    selected_name: str,
    dest: str,
    lister: Callable[[str], list] | None = None,
) -> PlaybackQueue:
    """
    List location, keep media files, and write an M3U to dest starting at selected_name.
    Returns the written queue; it is empty when selected_name is not among the media files.
    """
    if lister is None:
        from fzmedia.listing import list_entries as lister
    names = [entry.name for entry in lister(location)]
    queue = queue_from_names(location, names)
    anchor = join_location(location, selected_name)
    truncated = queue.truncate(anchor)
    if not truncated:
        log.warning("Selected item %s not found in %s", selected_name, location)
    else:
        log.debug("Built playlist of %d item(s) from %s", len(truncated), location)
    write_atomic(dest, truncated.render())
    return truncated
