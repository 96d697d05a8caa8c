"""Logging for the daemon, configured once from LoggingConfig.

issuefeed modules log under "issuefeed.<module>" and propagate to the root
handler installed here. What each level shows:

- ERROR: failed startup registration, unexpected scan errors
- WARNING: aborted repository scans, rejected feed requests
- INFO: scan passes, new issues and comments, created feeds
- DEBUG: skipped comments, HTTP access lines, urllib3 connection chatter

Configure via config.yaml (logging.level, logging.format) or env (LOGGING_LEVEL, LOGGING_FORMAT).
"""

import logging

from issuefeed.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers of the HTTP stack; they log every connection at DEBUG
NOISY_LOGGERS = ("urllib3",)


class IssueFeedLogging:
    """Installs the root handler and level for the daemon."""

    def __init__(self, config: LoggingConfig) -> None:
        self._requested = config.level.upper().strip()
        self.level = LEVELS.get(self._requested, logging.INFO)
        self._format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        logging.basicConfig(level=self.level, format=self._format, force=True)
        quiet = logging.DEBUG if self.level == logging.DEBUG else logging.WARNING
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(quiet)
        if self._requested not in LEVELS:
            logging.getLogger("issuefeed").warning("Unknown log level %r, using INFO", self._requested)
