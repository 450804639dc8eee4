"""Text formatting for profile values: bars, counters, padded names."""

from __future__ import annotations

import math
from typing import Dict, Iterable, List

from .models import RankedLanguage

BAR_CELLS = 10
FILLED_GLYPH = "▓"
EMPTY_GLYPH = "░"
NAME_WIDTH = 15


def _round_half_away_from_zero(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def render_bar(percentage: float) -> str:
    """Quantize a 0-100 percentage onto a ten-cell text bar."""
    if not math.isfinite(percentage):
        raise ValueError(f"Cannot render a bar for {percentage!r}")
    filled = max(_round_half_away_from_zero(percentage / BAR_CELLS), 0)
    empty = max(BAR_CELLS - filled, 0)
    return FILLED_GLYPH * filled + EMPTY_GLYPH * empty


def abbreviate_number(value: int) -> str:
    """Render counts of 1000 and above as ``12.3k``."""
    if value < 0:
        raise ValueError(f"Cannot abbreviate negative count {value}")
    if value >= 1000:
        return f"{value / 1000:.1f}k"
    return str(value)


def format_name(name: str) -> str:
    return f"{name:<{NAME_WIDTH}}"


def format_percentage(percentage: float) -> str:
    return f"{percentage:.2f}%"


def present_languages(ranked: Iterable[RankedLanguage]) -> List[Dict[str, str]]:
    """Return template rows of ``name``, ``bar`` and ``percentage_str``."""
    return [
        {
            "name": format_name(language.name),
            "bar": language.bar,
            "percentage_str": language.percentage_str,
        }
        for language in ranked
    ]


__all__ = [
    "abbreviate_number",
    "format_name",
    "format_percentage",
    "present_languages",
    "render_bar",
]
