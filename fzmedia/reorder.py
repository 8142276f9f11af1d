"""Stable reordering of listings by a preferred category order."""

from typing import Sequence, TypeVar

T = TypeVar("T")


def _name(item) -> str:
    return item if isinstance(item, str) else item.name


def reorder(entries: Sequence[T], preferred_order: Sequence[str]) -> list[T]:
    """Entries whose name is in preferred_order first (in that order), the rest after, input order kept within each key."""
    prio = {}
    for i, name in enumerate(preferred_order, start=1):
        prio.setdefault(name, i)
    fallback = len(preferred_order) + 1
    return sorted(entries, key=lambda e: prio.get(_name(e), fallback))
