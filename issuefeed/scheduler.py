"""Scheduler: scan every tracked repository, sleep, repeat."""

import logging
import threading
import time

from issuefeed.scanner import RepoScanner

LOG = logging.getLogger("issuefeed.scheduler")


def run_scheduler_loop(scanner: RepoScanner, interval_seconds: int = 300) -> None:
    """Loop forever: one full pass over all repositories, then sleep interval_seconds.

    Passes never overlap; the sleep starts only after a pass completes.
    """
    while True:
        LOG.info("Starting scan pass over %s repositories", len(scanner.repositories))
        try:
            emitted = scanner.scan_all()
            LOG.info("Scan pass finished, %s new feed items", emitted)
        except Exception as e:
            LOG.exception("Scheduler tick error: %s", e)
        time.sleep(interval_seconds)


def start_scheduler_thread(scanner: RepoScanner, interval_seconds: int = 300) -> threading.Thread:
    """Start the scheduler loop in a daemon thread."""
    thread = threading.Thread(
        target=run_scheduler_loop,
        args=(scanner,),
        kwargs={"interval_seconds": interval_seconds},
        name="issuefeed-scheduler",
        daemon=True,
    )
    thread.start()
    return thread
