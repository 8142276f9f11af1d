"""Shared fakes: scripted picker, recording runner, dict-backed lister."""

import os

import pytest

from fzmedia.config import Config
from fzmedia.launcher import ToolResult
from fzmedia.listing import Entry
from fzmedia.picker import PickResult


class FakePicker:
    """Returns scripted answers in order; records every option list it was shown."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.shown = []

    def pick(self, options):
        self.shown.append(list(options))
        if not self.answers:
            return PickResult('', False)
        answer = self.answers.pop(0)
        if answer is None:
            return PickResult('', False)
        return PickResult(answer, True)


class FakeRunner:
    """Records (command, args) and the content of the file argument at call time."""

    def __init__(self, returncode=0):
        self.calls = []
        self.seen = []
        self.returncode = returncode

    def __call__(self, command, *args):
        self.calls.append((command, args))
        content = None
        if args and os.path.isfile(args[-1]):
            with open(args[-1], encoding='utf-8', errors='surrogateescape') as f:
                content = f.read()
        self.seen.append(content)
        return ToolResult((command,) + args, self.returncode)


def dict_lister(listings):
    """Lister over {location: [names]}; unknown locations list as empty."""
    def lister(location):
        return [Entry.from_name(n) for n in listings.get(location, [])]
    return lister


@pytest.fixture
def media_tree(tmp_path):
    media = tmp_path / 'media'
    (media / 'sub').mkdir(parents=True)
    (media / 'movies').mkdir()
    for name in ('a.txt', 'b.mkv', 'c.mp4'):
        (media / name).write_text('x', encoding='utf-8')
    (media / 'sub' / 'd.mp3').write_text('x', encoding='utf-8')
    cache = tmp_path / 'cache'
    cache.mkdir()
    return media, cache


@pytest.fixture
def make_config(tmp_path, media_tree):
    media, cache = media_tree

    def make(**kw):
        values = dict(
            media_root=str(media),
            video_player='player --flag',
            resume_player='resumer',
            fuzzy_finder='fzy',
            m3u_file=str(tmp_path / 'queue.m3u'),
            cache_dir=str(cache),
            download_tool='dl -i',
            preferred_order=('movies/', 'tv/'),
            download=False,
        )
        values.update(kw)
        return Config(**values)
    return make
