"""Refresh continue-watching slots against the locations they were built from."""

from __future__ import annotations

import logging
from typing import Callable

from fzmedia.playlist import PlaybackQueue, queue_from_names
from fzmedia.resume_cache import ResumeCache

log = logging.getLogger(__name__)


def refresh_queue(queue: PlaybackQueue, lister: Callable[[str], list]) -> PlaybackQueue:
    """
    Rebuild queue from fresh listings of its parent locations.
    Keeps the previous first item as the start when it still exists; otherwise the whole fresh listing.
    Unreachable parents contribute nothing.
    """
    locators: list[str] = []
    for parent in queue.parents():
        names = [entry.name for entry in lister(parent)]
        locators.extend(queue_from_names(parent, names).locators())
    fresh = PlaybackQueue(locators)
    anchor = queue.first()
    if anchor is not None:
        anchored = fresh.truncate(anchor)
        if anchored:
            return anchored
    return fresh


def poll_all(cache: ResumeCache, lister: Callable[[str], list] | None = None) -> None:
    """One maintenance pass over every slot in cache. Errors on one slot do not stop the pass."""
    if lister is None:
        from fzmedia.listing import list_entries as lister
    for name in cache.names():
        try:
            old = cache.read(name)
        except (OSError, ValueError) as e:
            log.warning("Cannot read %s: %s", name, e)
            continue
        if not old:
            continue
        new = refresh_queue(old, lister)
        if new == old:
            log.debug("%s unchanged", name)
            continue
        try:
            cache.write(name, new)
        except OSError as e:
            log.warning("Cannot update %s: %s", name, e)
            continue
        if not new:
            log.warning("%s: source location is gone; slot emptied", name)
        else:
            log.info("%s refreshed (%d item(s))", name, len(new))
