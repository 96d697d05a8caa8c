"""issuefeed entry point.

Usage: issuefeed [serve] [--config PATH] [--check].
"""

import argparse
import logging
import sys
from pathlib import Path

from issuefeed.config import load_config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI with optional subcommand (serve)."""
    argv = argv if argv is not None else sys.argv[1:]
    rest = list(argv)
    if rest and rest[0] == "serve":
        rest = rest[1:]

    parser = argparse.ArgumentParser(
        prog="issuefeed",
        description="issuefeed - RSS/Atom/JSON feeds of labelled GitHub issues and comments",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(rest)


def main(argv: list[str] | None = None) -> int:
    """Entry point: validate config or run the daemon."""
    args = parse_args(argv)

    config_path = args.config
    if not config_path.is_file() and config_path == Path("config.yaml"):
        if Path("config.example.yaml").is_file():
            config_path = Path("config.example.yaml")
            logging.basicConfig(level=logging.INFO)
            logging.getLogger("issuefeed").warning("config.yaml not found, using config.example.yaml")

    config = load_config(config_path)

    if args.check:
        print("Config OK:", len(config.repositories), "repositories")
        for repo in config.repositories:
            print(f"  {repo.owner}/{repo.repo} labels={repo.labels}")
        return 0

    from issuefeed.daemon import run_daemon

    try:
        run_daemon(config)
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        logging.getLogger("issuefeed.daemon").exception("Fatal error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
