"""Tests for merging language byte maps."""

from __future__ import annotations

import itertools

from profilegen.stats.aggregate import merge_language_maps


def test_merge_sums_counts_per_language() -> None:
    totals = merge_language_maps([{"Go": 300}, {"Go": 200, "TypeScript": 500}, {}])
    assert totals == {"Go": 500, "TypeScript": 500}


def test_merge_is_order_independent() -> None:
    maps = [{"Go": 3, "C": 1}, {"Rust": 7}, {"C": 2, "Python": 4}, {}]
    expected = merge_language_maps(maps)
    for permutation in itertools.permutations(maps):
        assert merge_language_maps(permutation) == expected


def test_merge_keeps_first_seen_key_order() -> None:
    totals = merge_language_maps([{"Zig": 1}, {"Ada": 1, "Zig": 1}])
    assert list(totals) == ["Zig", "Ada"]


def test_merge_of_empty_maps_is_empty() -> None:
    assert merge_language_maps([]) == {}
    assert merge_language_maps([{}, {}]) == {}


def test_merge_does_not_mutate_inputs() -> None:
    first = {"Go": 1}
    merge_language_maps([first, {"Go": 2}])
    assert first == {"Go": 1}
