"""Configuration loading from YAML and environment.

Secrets (tokens, feed salt) are taken from environment variables or from
files (Docker secrets). Never put real tokens in config files committed to
the repo.

The RSS_FEED_* variables of earlier deployments are still honoured:
RSS_FEED_GITHUB_TOKEN, RSS_FEED_SALT and RSS_FEED_DEFAULT_ORG /
RSS_FEED_DEFAULT_REPO / RSS_FEED_DEFAULT_LABEL (one startup repository).
"""

from pathlib import Path
from typing import Any, List

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SALT = "SuperSecretSalt"


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Injected by load_config so properties can read env/file
_current_env: dict[str, str] = {}


def _unset(value: str | None) -> bool:
    return not value or value.startswith("${")


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT or app token; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    per_page: int = Field(default=100, ge=1, le=100, description="Page size for list requests")
    timeout: int = Field(default=30, ge=1, description="HTTP timeout in seconds")


class FeedConfig(BaseSettings):
    """Feed token and scan policy settings."""

    model_config = SettingsConfigDict(env_prefix="FEED_", extra="ignore")

    salt: str | None = Field(default=None, description="Secret salt for feed tokens; use env or secret file")
    min_length: int = Field(default=8, ge=0, description="Minimum feed token length")
    include_closed: bool = Field(default=False, description="Also scan closed issues")


class SchedulerConfig(BaseSettings):
    """Scheduler (polling) settings."""

    model_config = SettingsConfigDict(env_prefix="SCHEDULER_", extra="ignore")

    interval_seconds: int = Field(default=300, ge=1, description="Pause between scan passes in seconds")


class ServerConfig(BaseSettings):
    """Feed HTTP server settings."""

    model_config = SettingsConfigDict(env_prefix="SERVER_", extra="ignore")

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8080, ge=0, le=65535, description="Bind port (0 picks a free port)")
    allow_registration: bool = Field(default=False, description="Enable POST /feeds")
    public_url: str | None = Field(default=None, description="Base URL used in registration responses")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class RepositoryConfig(BaseModel):
    """Repository registered at startup."""

    owner: str
    repo: str
    labels: List[str] = Field(default_factory=list)

    @field_validator("labels", mode="before")
    @classmethod
    def _split_labels(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    repositories: List[RepositoryConfig] = Field(default_factory=list)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or Docker secret file."""
        t = self.github.token
        if not _unset(t):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE") or _read_secret(
            "RSS_FEED_GITHUB_TOKEN", "RSS_FEED_GITHUB_TOKEN_FILE"
        )

    @property
    def feed_salt_resolved(self) -> str:
        """Resolve feed token salt from config, env or Docker secret file."""
        s = self.feed.salt
        if not _unset(s):
            return s
        return _read_secret("FEED_SALT", "FEED_SALT_FILE") or _read_secret("RSS_FEED_SALT", "RSS_FEED_SALT_FILE") or DEFAULT_SALT


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def _default_repository_from_env() -> RepositoryConfig | None:
    owner = _current_env.get("RSS_FEED_DEFAULT_ORG")
    repo = _current_env.get("RSS_FEED_DEFAULT_REPO")
    label = _current_env.get("RSS_FEED_DEFAULT_LABEL")
    if not (owner and repo and label):
        return None
    return RepositoryConfig(owner=owner, repo=repo, labels=label)


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Secrets: GITHUB_TOKEN or GITHUB_TOKEN_FILE, FEED_SALT or FEED_SALT_FILE.
    """
    global _current_env
    import os

    _current_env = dict(os.environ)

    path = config_path or Path("config.yaml")
    raw: dict[str, Any] = {}
    if path.is_file():
        raw = yaml.safe_load(path.read_text()) or {}
        raw = _substitute_env(raw)

    repositories = [RepositoryConfig(**r) for r in (raw.get("repositories") or [])]
    env_repo = _default_repository_from_env()
    if env_repo is not None and env_repo not in repositories:
        repositories.append(env_repo)

    return AppConfig(
        github=GitHubConfig(**(raw.get("github") or {})),
        feed=FeedConfig(**(raw.get("feed") or {})),
        scheduler=SchedulerConfig(**(raw.get("scheduler") or {})),
        server=ServerConfig(**(raw.get("server") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
        repositories=repositories,
    )
