"""Repository enumeration and eligibility filtering."""

from __future__ import annotations

from typing import Any, Collection, Iterator, List

from ..logging import get_logger
from ..models import RepositoryRecord
from .client import GitHubClient, ParseError

PAGE_SIZE = 100
EXCLUDED_TOPICS = frozenset({"mirror", "no-stats"})


class RepositoryLister:
    """Pages through the authenticated account's owned repositories."""

    def __init__(self, client: GitHubClient, *, page_size: int = PAGE_SIZE) -> None:
        self.client = client
        self.page_size = page_size
        self.logger = get_logger("github.repositories")

    def iter_repositories(self) -> Iterator[RepositoryRecord]:
        """Yield repositories page by page until a page comes back empty."""
        page = 1
        while True:
            records = self._fetch_page(page)
            if not records:
                self.logger.debug("Page %d is empty; listing complete", page)
                return
            self.logger.debug("Page %d returned %d repositories", page, len(records))
            yield from records
            page += 1

    def list_repositories(self) -> List[RepositoryRecord]:
        """Return every repository, or raise if any page fails."""
        return list(self.iter_repositories())

    def _fetch_page(self, page: int) -> List[RepositoryRecord]:
        url = self.client.url(
            "user/repos",
            {"type": "owner", "per_page": self.page_size, "page": page},
        )
        payload = self.client.get_json(url)
        if not isinstance(payload, list):
            raise ParseError(f"Repository page {page} is not a JSON array")
        return [parse_repository(item) for item in payload]


def parse_repository(payload: Any) -> RepositoryRecord:
    """Build a RepositoryRecord from one element of the listing response."""
    if not isinstance(payload, dict):
        raise ParseError("Repository entry is not a JSON object")
    raw_topics = payload.get("topics")
    topics: frozenset[str] = frozenset()
    if isinstance(raw_topics, list):
        topics = frozenset(topic for topic in raw_topics if isinstance(topic, str))
    languages_url = payload.get("languages_url")
    return RepositoryRecord(
        name=str(payload.get("full_name") or payload.get("name") or ""),
        fork=payload.get("fork") is True,
        topics=topics,
        languages_url=languages_url if isinstance(languages_url, str) else None,
    )


def is_eligible(
    repository: RepositoryRecord, excluded_topics: Collection[str] = EXCLUDED_TOPICS
) -> bool:
    """Return True when the repository counts towards language statistics."""
    if repository.fork:
        return False
    return not any(topic in repository.topics for topic in excluded_topics)


def resolve_username(client: GitHubClient) -> str:
    """Return the login that owns the client's token."""
    payload = client.get_json(client.url("user"))
    login = payload.get("login") if isinstance(payload, dict) else None
    if not isinstance(login, str) or not login:
        raise ParseError("Authenticated user response has no 'login'")
    return login


__all__ = [
    "EXCLUDED_TOPICS",
    "PAGE_SIZE",
    "RepositoryLister",
    "is_eligible",
    "parse_repository",
    "resolve_username",
]
