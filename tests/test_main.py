"""Tests for CLI entry point and daemon wiring."""

from pathlib import Path
from unittest.mock import patch

import pytest

from issuefeed.config import AppConfig, RepositoryConfig
from issuefeed.daemon import build_scanner, register_configured
from issuefeed.errors import RegistrationError
from issuefeed.main import main, parse_args

from conftest import FakeTracker


def test_parse_args_accepts_serve_subcommand() -> None:
    args = parse_args(["serve", "--config", "x.yaml"])
    assert args.config == Path("x.yaml")
    assert not args.check


def test_check_prints_repositories(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    path = tmp_path / "c.yaml"
    path.write_text("repositories:\n  - owner: o\n    repo: r\n    labels: [bug]\n")
    assert main(["--config", str(path), "--check"]) == 0
    out = capsys.readouterr().out
    assert "Config OK: 1 repositories" in out
    assert "o/r" in out


def test_fatal_error_returns_one(tmp_path: Path) -> None:
    with patch("issuefeed.daemon.run_daemon", side_effect=RegistrationError("boom")):
        assert main(["--config", str(tmp_path / "missing.yaml")]) == 1


def test_build_scanner_uses_config() -> None:
    config = AppConfig()
    scanner = build_scanner(config)
    assert scanner.repositories == []
    assert scanner._adapter._per_page == config.github.per_page


def test_register_configured(scanner) -> None:
    config = AppConfig(
        repositories=[
            RepositoryConfig(owner="o", repo="a", labels=["bug"]),
            RepositoryConfig(owner="o", repo="b"),
        ]
    )
    tokens = register_configured(scanner, config)
    assert len(tokens) == 2
    assert [r.name for r in scanner.repositories] == ["a", "b"]


def test_register_configured_propagates_failure(scanner, tracker: FakeTracker) -> None:
    tracker.repo_failures.add("o/a")
    config = AppConfig(repositories=[RepositoryConfig(owner="o", repo="a", labels=["bug"])])
    with pytest.raises(RegistrationError):
        register_configured(scanner, config)
