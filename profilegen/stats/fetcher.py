"""Concurrent per-repository language fetch."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, List, Optional

from ..github.client import GitHubClient, ParseError, TransportError
from ..logging import get_logger
from ..models import FetchOutcome, LanguageByteMap, RepositoryRecord


class LanguageFetcher:
    """Fetches language byte counts for many repositories on a thread pool.

    A failed repository yields an empty contribution instead of an error, so
    one unreachable repository never aborts the run.
    """

    def __init__(self, client: GitHubClient, *, max_workers: Optional[int] = None) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be a positive integer")
        self.client = client
        self.max_workers = max_workers
        self.logger = get_logger("stats.fetcher")

    def fetch_all(self, repositories: Iterable[RepositoryRecord]) -> List[FetchOutcome]:
        """Return one outcome per repository, in the order they were given."""
        records = list(repositories)
        if not records:
            return []
        self.logger.info("Fetching languages for %d repositories", len(records))
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(self.fetch_one, record) for record in records]
            outcomes = [future.result() for future in futures]

        failed = [outcome for outcome in outcomes if outcome.failed]
        if failed:
            self.logger.warning(
                "Dropped %d of %d repositories after language fetch failures",
                len(failed),
                len(outcomes),
            )
        return outcomes

    def fetch_one(self, repository: RepositoryRecord) -> FetchOutcome:
        if repository.languages_url is None:
            self.logger.debug("%s has no languages_url; skipping", repository.name)
            return FetchOutcome(repository=repository)
        try:
            payload = self.client.get_json(repository.languages_url)
            languages = parse_language_map(payload)
        except (TransportError, ParseError) as exc:
            self.logger.debug("Language fetch failed for %s: %s", repository.name, exc)
            return FetchOutcome(repository=repository, error=str(exc))
        return FetchOutcome(repository=repository, languages=languages)


def parse_language_map(payload: Any) -> LanguageByteMap:
    """Validate a languages endpoint body as ``{name: non-negative int}``."""
    if not isinstance(payload, dict):
        raise ParseError("Language response is not a JSON object")
    languages: LanguageByteMap = {}
    for name, count in payload.items():
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ParseError(f"Byte count for '{name}' is not a non-negative integer")
        languages[str(name)] = count
    return languages


__all__ = ["LanguageFetcher", "parse_language_map"]
