"""Locations (directory paths or HTTP index URLs) and percent-encoding of entry names."""

import urllib.parse

# Characters left alone when re-encoding a whole index URL.
_URL_SAFE = "/:@?=&;~+,"


def is_remote(location: str) -> bool:
    """True for http:// and https:// index URLs."""
    return location.startswith(("http://", "https://"))


def decode_name(raw: str) -> str:
    """Percent-decode a name as it appears in an index page."""
    return urllib.parse.unquote(raw)


def encode_name(name: str) -> str:
    """Percent-encode a name for use in a URL. Decodes first, so already-encoded input is not double-encoded."""
    return urllib.parse.quote(urllib.parse.unquote(name), safe="/")


def normalize_location(location: str) -> str:
    """Strip trailing separators; remote locations are also re-encoded (idempotent)."""
    location = location.strip()
    if is_remote(location):
        location = urllib.parse.quote(urllib.parse.unquote(location), safe=_URL_SAFE)
    stripped = location.rstrip("/")
    if not stripped and location.startswith("/"):
        return "/"
    return stripped


def join_location(location: str, name: str) -> str:
    """Join a normalized location and an entry name (collection slash dropped)."""
    name = name.rstrip("/")
    if is_remote(location):
        name = encode_name(name)
    if location.endswith("/"):
        return location + name
    return f"{location}/{name}"


def parent_location(location: str) -> str:
    """Location one level up ("/" for top-level local paths)."""
    location = location.rstrip("/")
    head, sep, _tail = location.rpartition("/")
    if not sep:
        return location
    if not head:
        return "/"
    if is_remote(location) and head.endswith(":/"):
        # Already at the host root.
        return location
    return head
