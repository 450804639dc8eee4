"""Normalization of byte totals into a ranked, truncated language list."""

from __future__ import annotations

import math
from typing import List, Mapping, Tuple

from ..models import RankedLanguage
from ..presenter import format_percentage, render_bar

TOP_N = 8
DISPLAY_NAMES: Mapping[str, str] = {
    "Visual Basic .NET": "VB.NET",
    "Jupyter Notebook": "Jupyter",
}


class OrderingError(RuntimeError):
    """Raised when two percentages cannot be ordered (e.g. NaN)."""


def language_percentages(totals: Mapping[str, int]) -> List[Tuple[str, float]]:
    """Return every language with its share of total bytes, sorted descending.

    The sort is stable, so equal shares keep the order of ``totals``.
    """
    total_bytes = sum(totals.values())
    if total_bytes == 0:
        return []
    shares = [(language, count / total_bytes * 100.0) for language, count in totals.items()]
    for language, percentage in shares:
        if math.isnan(percentage):
            raise OrderingError(f"Percentage for '{language}' is not comparable")
    return sorted(shares, key=lambda share: share[1], reverse=True)


def display_name(language: str, overrides: Mapping[str, str] = DISPLAY_NAMES) -> str:
    return overrides.get(language, language)


def rank_languages(
    totals: Mapping[str, int],
    *,
    limit: int = TOP_N,
    display_names: Mapping[str, str] = DISPLAY_NAMES,
) -> List[RankedLanguage]:
    """Return the top ``limit`` languages, formatted for display."""
    ranked: List[RankedLanguage] = []
    for language, percentage in language_percentages(totals)[:limit]:
        ranked.append(
            RankedLanguage(
                name=display_name(language, display_names),
                percentage=percentage,
                bar=render_bar(percentage),
                percentage_str=format_percentage(percentage),
            )
        )
    return ranked


__all__ = [
    "DISPLAY_NAMES",
    "OrderingError",
    "TOP_N",
    "display_name",
    "language_percentages",
    "rank_languages",
]
