"""Account-level contribution counters from the GraphQL API."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Mapping

from ..models import AccountStats
from .client import GitHubClient, ParseError, QueryError

ACCOUNT_STATS_QUERY = """
query($username: String!, $from: DateTime, $to: DateTime) {
  user(login: $username) {
    contributionsCollection(from: $from, to: $to) {
      totalCommitContributions
      restrictedContributionsCount
    }
    pullRequests { totalCount }
    issues { totalCount }
    repositories(first: 100, ownerAffiliations: OWNER, isFork: false) {
      nodes { stargazerCount }
    }
    repositoriesContributedTo(first: 1, contributionTypes: [COMMIT, ISSUE, PULL_REQUEST, REPOSITORY]) {
      totalCount
    }
  }
}
"""


def year_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Return the first and last second of ``now``'s UTC calendar year."""
    start = datetime(now.year, 1, 1, 0, 0, 0, tzinfo=UTC)
    end = datetime(now.year, 12, 31, 23, 59, 59, tzinfo=UTC)
    return start, end


def fetch_account_stats(
    client: GitHubClient, username: str, *, now: datetime | None = None
) -> AccountStats:
    """Query contribution counters for ``username`` over the current year."""
    start, end = year_bounds(now or datetime.now(UTC))
    data = client.graphql(
        ACCOUNT_STATS_QUERY,
        {"username": username, "from": start.isoformat(), "to": end.isoformat()},
    )
    user = data.get("user")
    if not isinstance(user, dict):
        raise QueryError(f"GitHub user '{username}' not found")
    return parse_account_stats(user)


def parse_account_stats(user: Mapping[str, Any]) -> AccountStats:
    contributions = _as_mapping(user.get("contributionsCollection"), "contributionsCollection")
    repositories = _as_mapping(user.get("repositories"), "repositories")
    nodes = repositories.get("nodes")
    if not isinstance(nodes, list):
        raise ParseError("Field 'repositories.nodes' must be a list")

    stars = sum(_count(_as_mapping(node, "repositories.nodes[]"), "stargazerCount") for node in nodes)
    return AccountStats(
        commits_this_year=_count(contributions, "totalCommitContributions")
        + _count(contributions, "restrictedContributionsCount"),
        pull_requests=_total_count(user, "pullRequests"),
        issues=_total_count(user, "issues"),
        contributed_to=_total_count(user, "repositoriesContributedTo"),
        stars=stars,
    )


def _as_mapping(value: Any, field: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise ParseError(f"Field '{field}' must be an object")
    return value


def _total_count(user: Mapping[str, Any], field: str) -> int:
    return _count(_as_mapping(user.get(field), field), "totalCount")


def _count(container: Mapping[str, Any], field: str) -> int:
    value = container.get(field)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ParseError(f"Field '{field}' must be a non-negative integer")
    return value


__all__ = ["ACCOUNT_STATS_QUERY", "fetch_account_stats", "parse_account_stats", "year_bounds"]
