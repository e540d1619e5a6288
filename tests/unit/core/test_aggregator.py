from __future__ import annotations

"""
Unit tests for the CountedCollection aggregator.

Verifies:
1. Counting, first-seen ordering and the lockstep hash index.
2. Stable ascending sort.
3. Hash collisions never merge distinct keys.
4. Padding tracking.
"""

import random
from unittest.mock import patch

from countext.core.aggregator import MIN_PADDING, CountedCollection


def _fill(keys):
    collection = CountedCollection()
    for key in keys:
        collection.increase(key)
    return collection


def test_increase_counts_and_keeps_first_seen_order():
    collection = _fill([".py", ".txt", ".py", ".md", ".py", ".txt"])

    assert collection.entries() == [(".py", 3), (".txt", 2), (".md", 1)]
    assert collection.total == 6
    assert len(collection) == 3


def test_hash_index_stays_in_lockstep():
    collection = _fill(["a", "b", "a", "c"])

    assert len(collection.hashes) == len(collection)
    for key_hash, item in zip(collection.hashes, collection):
        assert key_hash == item.key_hash == hash(item.key)


def test_increase_returns_updated_entry():
    collection = CountedCollection()
    first = collection.increase(".c")
    second = collection.increase(".c")

    assert first is second
    assert second.count == 2


def test_sorted_entries_ascending_and_stable():
    collection = _fill(["x", "y", "y", "z", "w", "y", "x"])

    assert collection.sorted_entries() == [("z", 1), ("w", 1), ("x", 2), ("y", 3)]
    # The collection itself keeps insertion order
    assert [k for k, _ in collection.entries()] == ["x", "y", "z", "w"]


def test_report_entries_honours_sort_flag():
    collection = _fill(["b", "b", "a"])

    assert collection.report_entries(True) == [("a", 1), ("b", 2)]
    assert collection.report_entries(False) == [("b", 2), ("a", 1)]


def test_colliding_hashes_keep_keys_apart():
    """Two different keys with the same hash must not be merged."""
    with patch("countext.core.aggregator.hash", lambda key: 42, create=True):
        collection = _fill(["left", "right", "left"])

        assert collection.entries() == [("left", 2), ("right", 1)]
        assert collection.count_of("right") == 1
        assert collection.hashes == [42, 42]


def test_final_counts_do_not_depend_on_arrival_order():
    keys = [".py"] * 5 + [".md"] * 3 + [".txt"] * 2 + ["Makefile"]
    shuffled = list(keys)
    random.Random(7).shuffle(shuffled)

    assert dict(_fill(keys).entries()) == dict(_fill(shuffled).entries())


def test_repeated_runs_are_identical():
    keys = ["a", "b", "a", "c", "c", "c"]
    assert _fill(keys).sorted_entries() == _fill(keys).sorted_entries()


def test_padding_has_minimum_and_tracks_longest_key():
    collection = CountedCollection()
    assert collection.padding == MIN_PADDING == 5

    collection.increase(".c")
    assert collection.padding == 5

    collection.increase("CMakeLists.txt")
    assert collection.padding == len("CMakeLists.txt")


def test_membership_and_count_of_unknown_key():
    collection = _fill([".py"])

    assert ".py" in collection
    assert ".rs" not in collection
    assert 3 not in collection
    assert collection.count_of(".rs") == 0
