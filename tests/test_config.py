"""Tests for profilegen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from profilegen.config import (
    APIConfig,
    ConfigError,
    LanguageConfig,
    ProfileConfig,
    load_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ProfileConfig)
    assert config.root == tmp_path.resolve()
    assert config.username is None
    assert config.api == APIConfig()
    assert config.languages.top_n == 8
    assert config.languages.exclude_topics == ["mirror", "no-stats"]
    assert config.languages.display_names == {
        "Visual Basic .NET": "VB.NET",
        "Jupyter Notebook": "Jupyter",
    }
    assert config.readme.templates_dir is None
    assert config.readme.output == tmp_path.resolve() / "README.md"


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".profilegen.yml"
    config_file.write_text(
        """
username: ptrpaws
token_env: MY_TOKEN
api:
  base_url: "https://github.example.com/api/v3/"
  request_timeout: 12
languages:
  top_n: 5
  max_workers: 16
  exclude_topics: [mirror, no-stats, archived]
  display_names:
    Emacs Lisp: Elisp
readme:
  templates_dir: templates
  template: profile.md.j2
  output: docs/README.md
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.username == "ptrpaws"
    assert config.token_env == "MY_TOKEN"
    assert config.api.base_url == "https://github.example.com/api/v3"
    assert config.api.request_timeout == pytest.approx(12.0)
    assert isinstance(config.languages, LanguageConfig)
    assert config.languages.top_n == 5
    assert config.languages.max_workers == 16
    assert config.languages.exclude_topics == ["mirror", "no-stats", "archived"]
    assert config.languages.display_names["Emacs Lisp"] == "Elisp"
    assert config.languages.display_names["Jupyter Notebook"] == "Jupyter"
    assert config.readme.templates_dir == tmp_path.resolve() / "templates"
    assert config.readme.template == "profile.md.j2"
    assert config.readme.output == tmp_path.resolve() / "docs" / "README.md"


def test_null_timeout_and_workers_are_preserved(tmp_path: Path) -> None:
    (tmp_path / ".profilegen.yml").write_text(
        "api:\n  request_timeout: null\nlanguages:\n  max_workers: null\n",
        encoding="utf-8",
    )
    config = load_config(tmp_path)
    assert config.api.request_timeout is None
    assert config.languages.max_workers is None


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".profilegen.yml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_reports_yaml_syntax_errors(tmp_path: Path) -> None:
    (tmp_path / ".profilegen.yml").write_text("languages: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_load_config_rejects_invalid_top_n(tmp_path: Path) -> None:
    (tmp_path / ".profilegen.yml").write_text("languages:\n  top_n: 0\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "snippet, key",
    [
        ("top_n: 8.0", "languages.top_n"),
        ("max_workers: 4.5", "languages.max_workers"),
        ("top_n: eight", "languages.top_n"),
        ("max_workers: true", "languages.max_workers"),
    ],
)
def test_load_config_rejects_non_integer_counts(tmp_path: Path, snippet: str, key: str) -> None:
    (tmp_path / ".profilegen.yml").write_text(f"languages:\n  {snippet}\n", encoding="utf-8")
    with pytest.raises(ConfigError, match=f"{key} must be an integer"):
        load_config(tmp_path)


def test_resolve_token_prefers_gh_pat(tmp_path: Path) -> None:
    config = load_config(tmp_path)
    assert config.resolve_token({"GH_PAT": "a", "GITHUB_TOKEN": "b"}) == "a"
    assert config.resolve_token({"GITHUB_TOKEN": "b"}) == "b"


def test_resolve_token_uses_configured_variable(tmp_path: Path) -> None:
    config = ProfileConfig(root=tmp_path, token_env="MY_TOKEN")
    assert config.resolve_token({"MY_TOKEN": "x", "GH_PAT": "y"}) == "x"
    with pytest.raises(ConfigError, match="MY_TOKEN"):
        config.resolve_token({"GH_PAT": "y"})


def test_missing_token_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="GitHub token not set"):
        load_config(tmp_path).resolve_token({})


def test_resolve_username_falls_back_to_environment(tmp_path: Path) -> None:
    config = load_config(tmp_path)
    assert config.resolve_username({"PROFILEGEN_USERNAME": "octo"}) == "octo"
    assert config.resolve_username({}) is None
