"""fzmedia: browse media directories or HTTP indexes with a fuzzy finder, play from the chosen file."""

from fzmedia.listing import Entry, EntryKind, list_entries
from fzmedia.playlist import PlaybackQueue, build_playlist
from fzmedia.reorder import reorder
from fzmedia.resume_cache import ResumeCache

__all__ = [
    'Entry',
    'EntryKind',
    'PlaybackQueue',
    'ResumeCache',
    'build_playlist',
    'list_entries',
    'reorder',
]
