"""Picker options: navigation sentinels and listed entries, rendered to and parsed from picker lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from fzmedia.listing import Entry


@dataclass(frozen=True)
class Ascend:
    label: str = "../"


@dataclass(frozen=True)
class ManageCache:
    label: str = "rm"


@dataclass(frozen=True)
class ResumeList:
    label: str = "continue watching/"


ASCEND = Ascend()
MANAGE_CACHE = ManageCache()
RESUME_LIST = ResumeList()

Option = Union[Entry, Ascend, ManageCache, ResumeList]


def render_options(options: Iterable[Option]) -> list[str]:
    return [o.label for o in options]


def parse_choice(label: str, options: Iterable[Option]) -> Option:
    """Map a picker answer back to its option. Typed text that was not offered becomes a classified Entry."""
    for o in options:
        if o.label == label:
            return o
    return Entry.from_name(label)
