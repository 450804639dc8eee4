"""Pipeline orchestration for profile generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable, List, Mapping

from .config import ProfileConfig, load_config
from .github.account import fetch_account_stats
from .github.client import GitHubClient
from .github.repositories import RepositoryLister, is_eligible, resolve_username
from .logging import get_logger
from .models import RankedLanguage
from .rendering.renderer import ReadmeRenderer
from .stats.aggregate import merge_language_maps
from .stats.fetcher import LanguageFetcher
from .stats.ranker import rank_languages

ClientFactory = Callable[[ProfileConfig, str], GitHubClient]


@dataclass
class LanguageReport:
    """Outcome of the language pipeline for one account."""

    languages: List[RankedLanguage]
    repositories_total: int
    repositories_eligible: int
    dropped: List[str] = field(default_factory=list)


@dataclass
class GenerationOutcome:
    """Result of a README generation run."""

    path: Path
    content: str
    written: bool
    report: LanguageReport


def _default_client(config: ProfileConfig, token: str) -> GitHubClient:
    return GitHubClient(
        token,
        base_url=config.api.base_url,
        request_timeout=config.api.request_timeout,
    )


class Orchestrator:
    """Coordinates listing, language aggregation, account stats and rendering."""

    def __init__(
        self,
        client_factory: ClientFactory | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._client_factory = client_factory or _default_client
        self._environ = environ
        self._clock = clock or (lambda: datetime.now(UTC))
        self.logger = get_logger("orchestrator")

    def run(self, path: str, *, dry_run: bool = False) -> GenerationOutcome:
        """Render the profile README for the account configured under ``path``."""
        root = Path(path).expanduser().resolve()
        self.logger.info("Starting profile generation in %s", root)
        config = load_config(root)
        client = self._build_client(config)

        username = config.resolve_username(self._environ)
        if not username:
            username = resolve_username(client)
            self.logger.debug("Resolved username %s from token owner", username)

        now = self._clock()
        self.logger.info("Fetching account statistics for %s", username)
        stats = fetch_account_stats(client, username, now=now)
        report = self._language_report(client, config)

        renderer = ReadmeRenderer(config.readme.templates_dir, template=config.readme.template)
        context = renderer.build_context(username, stats, report.languages, now=now)
        content = renderer.render(context)

        output = config.readme.output
        if dry_run:
            self.logger.info("Dry-run completed; %s not written", output)
            return GenerationOutcome(path=output, content=content, written=False, report=report)

        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
        self.logger.info("README written to %s", output)
        return GenerationOutcome(path=output, content=content, written=True, report=report)

    def language_report(self, path: str) -> LanguageReport:
        """Run only the language pipeline for the account configured under ``path``."""
        root = Path(path).expanduser().resolve()
        config = load_config(root)
        return self._language_report(self._build_client(config), config)

    def _build_client(self, config: ProfileConfig) -> GitHubClient:
        token = config.resolve_token(self._environ)
        return self._client_factory(config, token)

    def _language_report(self, client: GitHubClient, config: ProfileConfig) -> LanguageReport:
        repositories = RepositoryLister(client).list_repositories()
        excluded = config.languages.exclude_topics
        eligible = [repo for repo in repositories if is_eligible(repo, excluded)]
        self.logger.info(
            "Found %d repositories, %d eligible for language stats",
            len(repositories),
            len(eligible),
        )

        fetcher = LanguageFetcher(client, max_workers=config.languages.max_workers)
        outcomes = fetcher.fetch_all(eligible)
        totals = merge_language_maps(outcome.languages for outcome in outcomes)
        if not totals:
            self.logger.warning("No language data found across eligible repositories")

        languages = rank_languages(
            totals,
            limit=config.languages.top_n,
            display_names=config.languages.display_names,
        )
        return LanguageReport(
            languages=languages,
            repositories_total=len(repositories),
            repositories_eligible=len(eligible),
            dropped=[outcome.repository.name for outcome in outcomes if outcome.failed],
        )


__all__ = ["GenerationOutcome", "LanguageReport", "Orchestrator"]
