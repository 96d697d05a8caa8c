"""Tests for config loading (YAML, env substitution, legacy RSS_FEED_* variables)."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from issuefeed.config import DEFAULT_SALT, AppConfig, RepositoryConfig, ServerConfig, load_config

ENV_KEYS = [
    "GITHUB_TOKEN",
    "GITHUB_TOKEN_FILE",
    "FEED_SALT",
    "FEED_SALT_FILE",
    "RSS_FEED_SALT",
    "RSS_FEED_GITHUB_TOKEN",
    "RSS_FEED_DEFAULT_ORG",
    "RSS_FEED_DEFAULT_REPO",
    "RSS_FEED_DEFAULT_LABEL",
    "SCHEDULER_INTERVAL_SECONDS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "nope.yaml")
    assert isinstance(config, AppConfig)
    assert config.scheduler.interval_seconds == 300
    assert config.server.port == 8080
    assert config.feed.min_length == 8
    assert config.feed.include_closed is False
    assert config.repositories == []
    assert config.feed_salt_resolved == DEFAULT_SALT
    assert config.github_token_resolved is None


def test_yaml_values_and_env_substitution(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_secret")
    path = tmp_path / "config.yaml"
    path.write_text(
        """
github:
  token: ${GITHUB_TOKEN}
  per_page: 50
feed:
  salt: pepper
  include_closed: true
scheduler:
  interval_seconds: 60
repositories:
  - owner: octocat
    repo: hello
    labels: [bug, help wanted]
  - owner: octocat
    repo: world
    labels: "docs, good first issue"
"""
    )
    config = load_config(path)
    assert config.github_token_resolved == "ghp_secret"
    assert config.github.per_page == 50
    assert config.feed_salt_resolved == "pepper"
    assert config.feed.include_closed is True
    assert config.scheduler.interval_seconds == 60
    assert config.repositories == [
        RepositoryConfig(owner="octocat", repo="hello", labels=["bug", "help wanted"]),
        RepositoryConfig(owner="octocat", repo="world", labels=["docs", "good first issue"]),
    ]


def test_unset_placeholder_falls_back_to_default_salt(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("feed:\n  salt: ${FEED_SALT}\n")
    assert load_config(path).feed_salt_resolved == DEFAULT_SALT


def test_legacy_env_variables(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """RSS_FEED_* variables provide token, salt and one startup repository."""
    monkeypatch.setenv("RSS_FEED_GITHUB_TOKEN", "legacy-token")
    monkeypatch.setenv("RSS_FEED_SALT", "legacy-salt")
    monkeypatch.setenv("RSS_FEED_DEFAULT_ORG", "org")
    monkeypatch.setenv("RSS_FEED_DEFAULT_REPO", "project")
    monkeypatch.setenv("RSS_FEED_DEFAULT_LABEL", "triage")
    config = load_config(tmp_path / "missing.yaml")
    assert config.github_token_resolved == "legacy-token"
    assert config.feed_salt_resolved == "legacy-salt"
    assert config.repositories == [RepositoryConfig(owner="org", repo="project", labels=["triage"])]


def test_partial_legacy_repository_is_ignored(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RSS_FEED_DEFAULT_ORG", "org")
    assert load_config(tmp_path / "missing.yaml").repositories == []


def test_token_from_secret_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    secret = tmp_path / "token"
    secret.write_text("from-file\n")
    monkeypatch.setenv("GITHUB_TOKEN_FILE", str(secret))
    assert load_config(tmp_path / "missing.yaml").github_token_resolved == "from-file"


def test_env_overrides_section(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCHEDULER_INTERVAL_SECONDS", "15")
    assert load_config(tmp_path / "missing.yaml").scheduler.interval_seconds == 15


def test_server_port_zero_allowed() -> None:
    """Port 0 asks the OS for a free port; out-of-range ports are rejected."""
    assert ServerConfig(host="127.0.0.1", port=0).port == 0
    with pytest.raises(ValidationError):
        ServerConfig(port=-1)
    with pytest.raises(ValidationError):
        ServerConfig(port=70000)
