"""Logging setup for command line use."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Send ``github_sync`` logs to stderr and optionally to a file.

    Args:
        verbose: Log DEBUG messages (every request) instead of WARNING only
        log_file: Also append full DEBUG logs to this file
    """
    logger = logging.getLogger("github_sync")
    logger.setLevel(logging.DEBUG)

    handler = next((h for h in logger.handlers if isinstance(h, RichHandler)), None)
    if handler is None:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        logger.addHandler(handler)
    handler.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if log_file is not None and not any(
        isinstance(h, logging.FileHandler)
        and getattr(h, "baseFilename", "") == str(log_file.resolve())
        for h in logger.handlers
    ):
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file)
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(fh)
