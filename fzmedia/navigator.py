"""Interactive browsing loop: pick entries until something is played, downloaded or the user quits."""

from __future__ import annotations

import logging
import os
from typing import Callable

from fzmedia import listing
from fzmedia.config import Config
from fzmedia.launcher import ToolResult, run_tool
from fzmedia.listing import Entry, EntryKind, list_entries
from fzmedia.locations import is_remote, join_location, normalize_location, parent_location
from fzmedia.options import (
    ASCEND,
    MANAGE_CACHE,
    RESUME_LIST,
    Ascend,
    ManageCache,
    Option,
    ResumeList,
    parse_choice,
    render_options,
)
from fzmedia.picker import Picker
from fzmedia.playlist import PlaybackQueue, build_playlist, write_atomic
from fzmedia.reorder import reorder
from fzmedia.resume_cache import ResumeCache

log = logging.getLogger(__name__)

# run() exit status
EXIT_OK = 0
# ToolResult status when a saved queue cannot be read
UNREADABLE = 1


class Navigator:
    """State is the current location; MEDIA_ROOT and the cache directory are special-cased."""

    def __init__(
        self,
        config: Config,
        picker: Picker,
        cache: ResumeCache,
        lister: Callable[[str], list[Entry]] = list_entries,
        runner: Callable[..., ToolResult] = run_tool,
    ) -> None:
        self.config = config
        self.picker = picker
        self.cache = cache
        self.lister = lister
        self.runner = runner
        self.media_root = normalize_location(config.media_root)
        self.cache_root = normalize_location(config.cache_dir)
        self.current = self.media_root

    def at_media_root(self) -> bool:
        return self.current == self.media_root

    def at_cache_root(self) -> bool:
        return self.current == self.cache_root

    def options_for(self, location: str) -> list[Option]:
        options: list[Option] = []
        at_root = location == self.media_root
        if at_root and not self.cache.is_empty():
            options.append(RESUME_LIST)
        options.extend(reorder(self.lister(location), self.config.preferred_order))
        if location == self.cache_root:
            options.append(MANAGE_CACHE)
        if not at_root:
            options.append(ASCEND)
        return options

    def _go(self, location: str) -> None:
        log.debug("Browsing %s", location)
        self.current = location

    def _up(self) -> None:
        if self.at_cache_root():
            self._go(self.media_root)
        else:
            self._go(parent_location(self.current))

    def run(self) -> int:
        """Loop until exit; returns the process exit status."""
        while True:
            options = self.options_for(self.current)
            result = self.picker.pick(render_options(options))
            if not result.ok:
                if self.at_media_root():
                    return EXIT_OK
                self._up()
                continue
            if not result.choice:
                return EXIT_OK
            if self.handle(parse_choice(result.choice, options)):
                return EXIT_OK

    def handle(self, option: Option) -> bool:
        """Apply one chosen option. Returns True when the session is finished."""
        if isinstance(option, ResumeList):
            self._go(self.cache_root)
        elif isinstance(option, ManageCache):
            self.manage_cache()
            self._go(self.media_root if self.cache.is_empty() else self.cache_root)
        elif isinstance(option, Ascend):
            self._up()
        elif option.kind is EntryKind.COLLECTION:
            self._go(join_location(self.current, option.name))
        elif option.kind is EntryKind.RESUME_ARTIFACT:
            self.resume(join_location(self.current, option.name))
            return True
        elif option.kind is EntryKind.MEDIA_FILE:
            return self.play(option.name)
        else:
            log.warning("skipping non-media: %s", option.name)
        return False

    def manage_cache(self) -> None:
        options = self.cache.list()
        result = self.picker.pick(render_options(options))
        if not result.ok or not result.choice:
            return
        choice = parse_choice(result.choice, options)
        if isinstance(choice, Entry):
            self.cache.remove(choice.name)

    def _download(self, queue: PlaybackQueue) -> ToolResult:
        write_atomic(self.config.m3u_file, queue.render_download())
        return self.runner(self.config.download_tool, self.config.m3u_file)

    def _read_artifact(self, path: str) -> PlaybackQueue:
        if is_remote(path):
            return PlaybackQueue.parse(listing.fetch_text(path))
        with open(path, encoding="utf-8", errors="surrogateescape") as f:
            return PlaybackQueue.parse(f.read())

    def resume(self, path: str) -> ToolResult:
        """Hand a saved queue (local file or URL) to the resume player, or download its items."""
        if not self.config.download:
            return self.runner(self.config.resume_player, path)
        try:
            queue = self._read_artifact(path)
        except (OSError, ValueError) as e:
            log.warning("Cannot read %s: %s", path, e)
            return ToolResult((self.config.download_tool, path), UNREADABLE)
        if not queue:
            log.warning("Nothing to download in %s", path)
            return ToolResult((self.config.download_tool, path), UNREADABLE)
        try:
            return self._download(queue)
        finally:
            self._discard_playlist()

    def play(self, name: str) -> bool:
        """Build the queue from the current location starting at name, then play or download it."""
        queue = build_playlist(self.current, name, self.config.m3u_file, self.lister)
        if not queue:
            log.warning("Nothing to play for %s", name)
            self._discard_playlist()
            return False
        try:
            if self.config.download:
                self._download(queue)
            else:
                self.runner(self.config.video_player, self.config.m3u_file)
            self.cache.offer(queue, name)
        finally:
            self._discard_playlist()
        return True

    def _discard_playlist(self) -> None:
        try:
            os.remove(self.config.m3u_file)
        except FileNotFoundError:
            pass
