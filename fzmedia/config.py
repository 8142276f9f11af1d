"""Load the shell-style config file, apply defaults and CLI overrides."""

from __future__ import annotations

import logging
import os
import re
import shlex
from dataclasses import dataclass
from typing import Mapping

from fzmedia.locations import normalize_location

log = logging.getLogger(__name__)

# Option names in the order they are written to a fresh config file.
OPTIONS = (
    "MEDIA_ROOT",
    "VIDEO_PLAYER",
    "RESUME_PLAYER",
    "DOWNLOAD_TOOL",
    "FUZZY_FINDER",
    "M3U_FILE",
    "PREFERRED_ORDER",
    "CACHE_DIR",
)

_LINE_RE = re.compile(r"^\s*(?:export\s+)?([A-Z_][A-Z0-9_]*)=(.*)$")
# $NAME or ${NAME}
_VAR_RE = re.compile(r"\$(?:\{([A-Za-z_][A-Za-z0-9_]*)\}|([A-Za-z_][A-Za-z0-9_]*))")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class Config:
    media_root: str
    video_player: str
    resume_player: str
    fuzzy_finder: str
    m3u_file: str
    cache_dir: str
    download_tool: str
    preferred_order: tuple[str, ...]
    download: bool = False


def _home(env: Mapping[str, str]) -> str:
    return env.get("HOME") or os.path.expanduser("~")


def config_home(env: Mapping[str, str]) -> str:
    return env.get("XDG_CONFIG_HOME") or os.path.join(_home(env), ".config")


def cache_home(env: Mapping[str, str]) -> str:
    return env.get("XDG_CACHE_HOME") or os.path.join(_home(env), ".cache")


def config_path(env: Mapping[str, str]) -> str:
    return os.path.join(config_home(env), "fzmedia", "config")


def defaults(env: Mapping[str, str]) -> dict[str, str]:
    return {
        "MEDIA_ROOT": "",
        "VIDEO_PLAYER": "mpv --save-position-on-quit --no-resume-playback",
        "RESUME_PLAYER": "mpv --save-position-on-quit",
        "DOWNLOAD_TOOL": "wget -c -i",
        "FUZZY_FINDER": "fzy",
        "M3U_FILE": "/tmp/fzmedia.m3u",
        "PREFERRED_ORDER": "movies/,tv/,anime/,music/",
        "CACHE_DIR": os.path.join(cache_home(env), "fzmedia"),
    }


def expand_vars(value: str, scope: Mapping[str, str]) -> str:
    """Substitute $NAME and ${NAME} from scope; unknown names are left as written."""
    def sub(m: re.Match) -> str:
        name = m.group(1) or m.group(2)
        return scope.get(name, m.group(0))
    return _VAR_RE.sub(sub, value)


def parse_config(text: str, env: Mapping[str, str] | None = None) -> dict[str, str]:
    """
    Parse VAR="value" lines. Comments, blank lines and unparsable values are skipped.
    Variable references are expanded from env and from options set earlier in the file,
    as sourcing the file from a shell would (quoting style is not distinguished).
    """
    env = {} if env is None else env
    values: dict[str, str] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        m = _LINE_RE.match(line)
        if not m:
            continue
        key, raw = m.groups()
        try:
            words = shlex.split(raw, comments=True)
        except ValueError as e:
            log.warning("config line %d: %s", lineno, e)
            continue
        if key not in OPTIONS:
            log.debug("config line %d: ignoring unknown option %s", lineno, key)
            continue
        values[key] = expand_vars(" ".join(words), {**env, **values})
    return values


def ensure_config_file(path: str, env: Mapping[str, str]) -> None:
    """Create the config file if needed and append a commented default for every option it lacks."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    try:
        with open(path, encoding="utf-8") as f:
            existing = f.read()
    except FileNotFoundError:
        existing = ""
    missing = []
    for key, value in defaults(env).items():
        if re.search(rf"^\s*#?\s*{key}=", existing, re.MULTILINE):
            continue
        hint = "#/path/to/file or http://example.com" if key == "MEDIA_ROOT" else "#default"
        missing.append(f'#{key}="{value}" {hint}\n')
    if not missing:
        return
    with open(path, "a", encoding="utf-8") as f:
        if existing and not existing.endswith("\n"):
            f.write("\n")
        f.writelines(missing)


def split_order(value: str) -> tuple[str, ...]:
    return tuple(p.strip() for p in value.split(",") if p.strip())


def load_config(
    overrides: Mapping[str, str | None] | None = None,
    download: bool = False,
    env: Mapping[str, str] | None = None,
    path: str | None = None,
) -> Config:
    """Defaults < config file < overrides (None values ignored). Raises ConfigError if MEDIA_ROOT ends up empty."""
    env = os.environ if env is None else env
    path = path or config_path(env)
    ensure_config_file(path, env)
    with open(path, encoding="utf-8") as f:
        values = defaults(env)
        values.update(parse_config(f.read(), env))
    for key, value in (overrides or {}).items():
        if value:
            values[key] = value

    media_root = values["MEDIA_ROOT"].strip()
    if not media_root:
        raise ConfigError(f"MEDIA_ROOT must be set (edit {path} or pass -s).")

    return Config(
        media_root=normalize_location(os.path.expanduser(media_root)),
        video_player=values["VIDEO_PLAYER"],
        resume_player=values["RESUME_PLAYER"],
        fuzzy_finder=values["FUZZY_FINDER"],
        m3u_file=os.path.expanduser(values["M3U_FILE"]),
        cache_dir=normalize_location(os.path.expanduser(values["CACHE_DIR"])),
        download_tool=values["DOWNLOAD_TOOL"],
        preferred_order=split_order(values["PREFERRED_ORDER"]),
        download=download,
    )
