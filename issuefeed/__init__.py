"""issuefeed: republish labelled GitHub issues and comments as RSS, Atom and JSON feeds."""

__version__ = "0.1.0"
