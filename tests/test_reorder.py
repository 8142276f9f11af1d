"""Tests for fzmedia.reorder: preferred categories first, stable otherwise."""

import random
from collections import namedtuple

from fzmedia.listing import Entry
from fzmedia.reorder import reorder

# Same name may repeat; idx tells the copies apart.
Item = namedtuple('Item', 'name idx')


class TestReorder:
    def test_example_order(self):
        out = reorder(['music/', 'movies/', 'tv/', 'anime/'], ['movies/', 'tv/'])
        assert out == ['movies/', 'tv/', 'music/', 'anime/']

    def test_preferred_list_order_wins(self):
        assert reorder(['tv/', 'movies/'], ['movies/', 'tv/']) == ['movies/', 'tv/']

    def test_empty_preferences_keep_input(self):
        names = ['c', 'a', 'b']
        assert reorder(names, []) == names

    def test_exact_match_only(self):
        assert reorder(['movies', 'x', 'movies/'], ['movies/']) == ['movies/', 'movies', 'x']

    def test_entries(self):
        entries = [Entry.from_name('b.mkv'), Entry.from_name('tv/')]
        assert [e.name for e in reorder(entries, ['tv/'])] == ['tv/', 'b.mkv']


class TestReorderProperties:
    """Output is a permutation of the input; equal keys keep input order."""

    def test_random_inputs(self):
        rng = random.Random(7)
        pool = ['movies/', 'tv/', 'anime/', 'x', 'y', 'z']
        prefs = ['tv/', 'movies/']
        rank = {'tv/': 1, 'movies/': 2}
        for _ in range(100):
            items = [Item(rng.choice(pool), i) for i in range(rng.randint(0, 15))]
            out = reorder(items, prefs)
            assert sorted(out, key=lambda it: it.idx) == items
            keys = [rank.get(it.name, 3) for it in out]
            assert keys == sorted(keys)
            for a, b in zip(out, out[1:]):
                if rank.get(a.name, 3) == rank.get(b.name, 3):
                    assert a.idx < b.idx
