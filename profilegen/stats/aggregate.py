"""Merging of per-repository language byte maps."""

from __future__ import annotations

from typing import Iterable, Mapping

from ..models import LanguageByteMap


def merge_language_maps(maps: Iterable[Mapping[str, int]]) -> LanguageByteMap:
    """Sum byte counts per language across ``maps``.

    Keys keep the order in which they were first seen, which later decides
    ties in the ranking. Empty input yields an empty mapping.
    """
    totals: LanguageByteMap = {}
    for languages in maps:
        for language, count in languages.items():
            totals[language] = totals.get(language, 0) + count
    return totals


__all__ = ["merge_language_maps"]
