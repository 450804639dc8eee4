"""Tests for percentage normalization and ranking."""

from __future__ import annotations

import math

import pytest

from profilegen.stats.ranker import (
    OrderingError,
    display_name,
    language_percentages,
    rank_languages,
)


def test_empty_totals_rank_to_empty_list() -> None:
    assert rank_languages({}) == []
    assert rank_languages({"Go": 0, "C": 0}) == []


def test_full_percentages_sum_to_one_hundred() -> None:
    totals = {f"Lang{i}": (i * 7919) % 1013 + 1 for i in range(25)}
    shares = language_percentages(totals)
    assert len(shares) == 25
    assert math.isclose(sum(p for _, p in shares), 100.0, rel_tol=1e-9)


def test_ranking_is_descending_and_truncated_to_eight() -> None:
    totals = {f"L{i}": i + 1 for i in range(12)}
    ranked = rank_languages(totals)
    assert len(ranked) == 8
    assert [language.name for language in ranked] == [f"L{i}" for i in range(11, 3, -1)]
    percentages = [language.percentage for language in ranked]
    assert percentages == sorted(percentages, reverse=True)


def test_short_lists_are_not_padded() -> None:
    assert len(rank_languages({"Go": 1, "C": 2})) == 2


def test_ties_keep_first_seen_order() -> None:
    ranked = rank_languages({"Go": 500, "TypeScript": 500})
    assert [language.name for language in ranked] == ["Go", "TypeScript"]
    assert [language.percentage_str for language in ranked] == ["50.00%", "50.00%"]

    reversed_ranked = rank_languages({"TypeScript": 500, "Go": 500})
    assert [language.name for language in reversed_ranked] == ["TypeScript", "Go"]


def test_ranking_is_idempotent() -> None:
    totals = {"Rust": 10, "Go": 30, "C": 30, "Python": 5}
    assert rank_languages(totals) == rank_languages(totals)


def test_ranked_entries_carry_bar_and_percentage() -> None:
    ranked = rank_languages({"Go": 3, "C": 1})
    assert ranked[0].percentage == pytest.approx(75.0)
    assert ranked[0].bar == "▓" * 8 + "░" * 2
    assert ranked[0].percentage_str == "75.00%"


def test_display_name_overrides_apply_after_ranking() -> None:
    ranked = rank_languages({"Jupyter Notebook": 3, "Visual Basic .NET": 2, "Rust": 1})
    assert [language.name for language in ranked] == ["Jupyter", "VB.NET", "Rust"]


def test_display_name_passes_through_unknown_names() -> None:
    assert display_name("Jupyter Notebook") == "Jupyter"
    assert display_name("Rust") == "Rust"
    assert display_name("jupyter notebook") == "jupyter notebook"


def test_custom_limit_and_display_names() -> None:
    ranked = rank_languages({"Go": 2, "C": 1}, limit=1, display_names={"Go": "Golang"})
    assert [language.name for language in ranked] == ["Golang"]


def test_nan_percentage_raises_ordering_error() -> None:
    with pytest.raises(OrderingError):
        language_percentages({"Go": float("nan"), "C": 1})  # type: ignore[dict-item]
