"""Configuration loading for profilegen (.profilegen.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .github.repositories import EXCLUDED_TOPICS
from .stats.ranker import DISPLAY_NAMES, TOP_N

CONFIG_FILENAME = ".profilegen.yml"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TOKEN_ENV_KEYS = ("GH_PAT", "GITHUB_TOKEN")
USERNAME_ENV_KEY = "PROFILEGEN_USERNAME"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed or is incomplete."""


@dataclass
class APIConfig:
    """GitHub API endpoint settings."""

    base_url: str = DEFAULT_API_URL
    request_timeout: Optional[float] = 30.0


@dataclass
class LanguageConfig:
    """Language aggregation settings."""

    top_n: int = TOP_N
    max_workers: Optional[int] = 8
    exclude_topics: List[str] = field(default_factory=lambda: sorted(EXCLUDED_TOPICS))
    display_names: Dict[str, str] = field(default_factory=lambda: dict(DISPLAY_NAMES))


@dataclass
class ReadmeConfig:
    """Template and output locations."""

    templates_dir: Optional[Path] = None
    template: str = "README.md.j2"
    output: Path = Path("README.md")


@dataclass
class ProfileConfig:
    """Represents the settings defined in .profilegen.yml."""

    root: Path
    username: Optional[str] = None
    token_env: Optional[str] = None
    api: APIConfig = field(default_factory=APIConfig)
    languages: LanguageConfig = field(default_factory=LanguageConfig)
    readme: ReadmeConfig = field(default_factory=ReadmeConfig)

    def resolve_token(self, environ: Mapping[str, str] | None = None) -> str:
        """Return the API token from the environment or raise ConfigError."""
        env = os.environ if environ is None else environ
        keys = (self.token_env,) if self.token_env else DEFAULT_TOKEN_ENV_KEYS
        for key in keys:
            value = env.get(key)
            if value:
                return value
        raise ConfigError(f"GitHub token not set; export {' or '.join(keys)}")

    def resolve_username(self, environ: Mapping[str, str] | None = None) -> Optional[str]:
        """Return the configured username, falling back to PROFILEGEN_USERNAME."""
        if self.username:
            return self.username
        env = os.environ if environ is None else environ
        return env.get(USERNAME_ENV_KEY) or None


def load_config(config_path: Path) -> ProfileConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ProfileConfig(root=root, readme=ReadmeConfig(output=root / "README.md"))

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    api_data = _as_dict(data.get("api"))
    api = APIConfig()
    if api_data:
        api.base_url = (_as_str(api_data.get("base_url")) or DEFAULT_API_URL).rstrip("/")
        if "request_timeout" in api_data:
            api.request_timeout = _as_float(api_data.get("request_timeout"))

    languages_data = _as_dict(data.get("languages"))
    languages = LanguageConfig()
    if languages_data:
        top_n = _as_int(languages_data.get("top_n"), "languages.top_n")
        if top_n is not None:
            if top_n < 1:
                raise ConfigError("languages.top_n must be a positive integer")
            languages.top_n = top_n
        if "max_workers" in languages_data:
            max_workers = _as_int(languages_data.get("max_workers"), "languages.max_workers")
            if max_workers is not None and max_workers < 1:
                raise ConfigError("languages.max_workers must be a positive integer")
            languages.max_workers = max_workers
        if "exclude_topics" in languages_data:
            languages.exclude_topics = _as_str_list(languages_data.get("exclude_topics"))
        overrides = _as_dict(languages_data.get("display_names"))
        for name, display in overrides.items():
            display_str = _as_str(display)
            if display_str:
                languages.display_names[str(name)] = display_str

    readme_data = _as_dict(data.get("readme"))
    readme = ReadmeConfig(output=root / "README.md")
    if readme_data:
        templates_dir = _as_str(readme_data.get("templates_dir"))
        readme.templates_dir = root / templates_dir if templates_dir else None
        readme.template = _as_str(readme_data.get("template")) or readme.template
        output = _as_str(readme_data.get("output"))
        if output:
            readme.output = root / output

    return ProfileConfig(
        root=root,
        username=_as_str(data.get("username")),
        token_env=_as_str(data.get("token_env")),
        api=api,
        languages=languages,
        readme=readme,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any, key: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    raise ConfigError(f"{key} must be an integer, got {value!r}")


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
