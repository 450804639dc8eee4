"""Language statistics pipeline: fetch, merge, rank."""

from .aggregate import merge_language_maps
from .fetcher import LanguageFetcher, parse_language_map
from .ranker import DISPLAY_NAMES, TOP_N, OrderingError, language_percentages, rank_languages

__all__ = [
    "DISPLAY_NAMES",
    "LanguageFetcher",
    "OrderingError",
    "TOP_N",
    "language_percentages",
    "merge_language_maps",
    "parse_language_map",
    "rank_languages",
]
