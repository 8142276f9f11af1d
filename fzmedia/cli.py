"""Command line entry point: flags, startup checks, cache maintenance, then the navigator."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from fzmedia import log_config
from fzmedia.admin import REFUSAL_MESSAGE, is_privileged
from fzmedia.config import ConfigError, load_config
from fzmedia.navigator import Navigator
from fzmedia.picker import Picker
from fzmedia.poller import poll_all
from fzmedia.resume_cache import ResumeCache
from fzmedia.version import __version__

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fzmedia",
        description="Browse a media directory or HTTP index with a fuzzy finder and play from the chosen file.",
    )
    p.add_argument("-s", dest="MEDIA_ROOT", metavar="MEDIA_ROOT",
                   help="media root path (directory or HTTP index)")
    p.add_argument("-p", dest="VIDEO_PLAYER", metavar="CMD", help="video player command")
    p.add_argument("-r", dest="RESUME_PLAYER", metavar="CMD", help="resume player command")
    p.add_argument("-f", dest="FUZZY_FINDER", metavar="CMD", help="fuzzy-finder command")
    p.add_argument("-m", dest="M3U_FILE", metavar="PATH", help="path to m3u file")
    p.add_argument("-c", dest="CACHE_DIR", metavar="PATH", help="path to cache dir")
    p.add_argument("-d", dest="download", action="store_true",
                   help="download the video instead of play")
    p.add_argument("-t", dest="DOWNLOAD_TOOL", metavar="CMD", help="download tool")
    p.add_argument("--poll-only", action="store_true",
                   help="refresh the continue-watching cache and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return p


OVERRIDE_KEYS = (
    "MEDIA_ROOT", "VIDEO_PLAYER", "RESUME_PLAYER", "FUZZY_FINDER",
    "M3U_FILE", "CACHE_DIR", "DOWNLOAD_TOOL",
)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    log_config.setup_logging(verbose=args.verbose)

    if is_privileged():
        print(REFUSAL_MESSAGE, file=sys.stderr)
        return 1

    overrides = {key: getattr(args, key) for key in OVERRIDE_KEYS}
    try:
        config = load_config(overrides, download=args.download)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        log.error("Cannot read configuration: %s", e)
        return 1

    os.makedirs(config.cache_dir, exist_ok=True)
    picker = Picker(config.fuzzy_finder)
    cache = ResumeCache(config.cache_dir, picker)
    poll_all(cache)
    if args.poll_only:
        return 0

    try:
        return Navigator(config, picker, cache).run()
    except KeyboardInterrupt:
        return 130
