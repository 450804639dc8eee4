"""Core data models shared across profilegen components."""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional

LanguageByteMap = Dict[str, int]


@dataclass(frozen=True)
class RepositoryRecord:
    """A repository as reported by the listing endpoint."""

    name: str
    fork: bool = False
    topics: FrozenSet[str] = field(default_factory=frozenset)
    languages_url: Optional[str] = None


@dataclass
class FetchOutcome:
    """Result of fetching one repository's language breakdown."""

    repository: RepositoryRecord
    languages: LanguageByteMap = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class RankedLanguage:
    """A language entry ready for display."""

    name: str
    percentage: float
    bar: str
    percentage_str: str


@dataclass(frozen=True)
class AccountStats:
    """Contribution counters for a single account."""

    commits_this_year: int
    pull_requests: int
    issues: int
    contributed_to: int
    stars: int
