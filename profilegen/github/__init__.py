"""GitHub API access: client, repository listing, account statistics."""

from .account import fetch_account_stats
from .client import GitHubClient, ParseError, QueryError, TransportError
from .repositories import EXCLUDED_TOPICS, RepositoryLister, is_eligible, resolve_username

__all__ = [
    "EXCLUDED_TOPICS",
    "GitHubClient",
    "ParseError",
    "QueryError",
    "RepositoryLister",
    "TransportError",
    "fetch_account_stats",
    "is_eligible",
    "resolve_username",
]
