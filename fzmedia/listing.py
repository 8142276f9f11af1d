"""List the entries of a location: a local directory or a remote HTTP directory index."""

import enum
import html as html_module
import logging
import os
import re
import urllib.error
import urllib.request
from dataclasses import dataclass

from fzmedia.locations import decode_name, is_remote
from fzmedia.playlist import is_media, is_playlist
from fzmedia.version import __version__

log = logging.getLogger(__name__)

USER_AGENT = f"fzmedia/{__version__}"
FETCH_TIMEOUT = 15

# <a href="...">; the first one on an index page is the parent-directory link
HREF_RE = re.compile(r'href="([^"]*)"', re.IGNORECASE)


class EntryKind(enum.Enum):
    COLLECTION = "collection"
    MEDIA_FILE = "media"
    RESUME_ARTIFACT = "resume"
    UNKNOWN = "unknown"


def classify(name: str) -> EntryKind:
    if name.endswith("/"):
        return EntryKind.COLLECTION
    if is_playlist(name):
        return EntryKind.RESUME_ARTIFACT
    if is_media(name):
        return EntryKind.MEDIA_FILE
    return EntryKind.UNKNOWN


@dataclass(frozen=True)
class Entry:
    """One listed item. Collections keep their trailing '/' in name."""

    name: str
    kind: EntryKind

    @classmethod
    def from_name(cls, name: str) -> "Entry":
        return cls(name, classify(name))

    @property
    def label(self) -> str:
        return self.name


def parse_index(data: str) -> list[str]:
    """Extract href targets from an index page, drop the first (parent link), unescape and percent-decode.
    Empty hrefs (href="") point back at the page itself and are skipped.
    """
    hrefs = HREF_RE.findall(data)[1:]
    return [decode_name(html_module.unescape(h)) for h in hrefs if h]


def fetch_text(url: str, timeout: float = FETCH_TIMEOUT) -> str:
    """GET url and return its body as text."""
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    with urllib.request.urlopen(req, timeout=timeout) as r:
        return r.read().decode("utf-8", errors="replace")


def fetch_index(url: str, timeout: float = FETCH_TIMEOUT) -> str:
    """GET an index page (url is a normalized location, without the trailing slash)."""
    return fetch_text(url + "/", timeout=timeout)


def list_local(directory: str) -> list[str]:
    """Immediate children of directory, sorted; sub-directories end with '/'. Missing dir -> []."""
    try:
        with os.scandir(directory or "/") as it:
            children = [
                e.name + "/" if e.is_dir() else e.name
                for e in it
                if not e.name.startswith(".")
            ]
    except OSError as e:
        log.warning("Cannot list %s: %s", directory, e)
        return []
    return sorted(children)


def list_remote(url: str) -> list[str]:
    """Names on a remote index page. Network and HTTP errors -> []."""
    try:
        data = fetch_index(url)
    except urllib.error.HTTPError as e:
        log.warning("Cannot list %s: HTTP %s %s", url, e.code, e.reason)
        return []
    except urllib.error.URLError as e:
        log.warning("Cannot list %s: %s", url, e.reason or "connection error")
        return []
    except (OSError, ValueError) as e:
        log.warning("Cannot list %s: %s", url, e)
        return []
    return parse_index(data)


def list_entries(location: str) -> list[Entry]:
    """Entries at location in listing order; empty when the location is missing or unreachable."""
    names = list_remote(location) if is_remote(location) else list_local(location)
    log.debug("Listed %d entr(ies) in %s", len(names), location)
    return [Entry.from_name(name) for name in names]
