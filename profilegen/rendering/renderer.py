"""Renders the profile README from Jinja2 templates."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from ..models import AccountStats, RankedLanguage
from ..presenter import abbreviate_number, present_languages

DEFAULT_TEMPLATE = "README.md.j2"


class RenderError(RuntimeError):
    """Raised when the README template cannot be located."""


class ReadmeRenderer:
    """Looks up templates in a user directory first, then the packaged defaults."""

    def __init__(self, templates_dir: Path | None = None, *, template: str = DEFAULT_TEMPLATE) -> None:
        self.templates_dir = templates_dir
        self.template = template
        self._env = self._create_env(templates_dir)

    def build_context(
        self,
        username: str,
        stats: AccountStats,
        languages: Iterable[RankedLanguage],
        *,
        now: Optional[datetime] = None,
    ) -> Dict[str, object]:
        timestamp = (now or datetime.now(UTC)).strftime("%Y-%m-%d %H:%M:%S")
        rows: List[Dict[str, str]] = present_languages(languages)
        return {
            "username": username,
            "total_stars": abbreviate_number(stats.stars),
            "total_commits_this_year": abbreviate_number(stats.commits_this_year),
            "total_prs": abbreviate_number(stats.pull_requests),
            "total_issues": abbreviate_number(stats.issues),
            "contributed_to": abbreviate_number(stats.contributed_to),
            "languages": rows,
            "last_updated": f"Last updated {timestamp} UTC",
        }

    def render(self, context: Dict[str, object]) -> str:
        try:
            template = self._env.get_template(self.template)
        except TemplateNotFound as exc:
            raise RenderError(f"Template '{self.template}' not found") from exc
        return template.render(**context)

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: list[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )


__all__ = ["DEFAULT_TEMPLATE", "ReadmeRenderer", "RenderError"]
