"""
Logging utilities for company_match CLI.

Provides logging setup and header printing functions with tqdm compatibility.
"""

import logging
import sys
import time
from pathlib import Path
from typing import TextIO

from tqdm import tqdm


class TqdmLoggingHandler(logging.StreamHandler):
    """
    Console handler that prints through tqdm.write().

    Log lines land on their own line instead of splitting an active
    progress bar (ingestion merge, batch evaluation).
    """

    def __init__(self, level: int = logging.NOTSET, stream: TextIO | None = None):
        super().__init__(stream or sys.stderr)
        self.setLevel(level)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=self.stream)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


class FlushingFileHandler(logging.FileHandler):
    """File handler that flushes after each record so logs hit disk immediately."""

    def emit(self, record):
        super().emit(record)
        self.flush()


def _console_handler(level: int, tqdm_compatible: bool) -> logging.Handler:
    handler = TqdmLoggingHandler(level) if tqdm_compatible else logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def setup_logging(
    script_name: str,
    execute: bool = False,
    log_dir: Path = Path("logs"),
    tqdm_compatible: bool = True,
    verbose: bool = False,
) -> logging.Logger:
    """
    Set up logging for a command.

    Args:
        script_name: Name of the command (for log file naming)
        execute: If True, log to file + console. If False, only console.
        log_dir: Directory for log files
        tqdm_compatible: If True, use TqdmLoggingHandler for clean progress bar output
        verbose: If True, show DEBUG messages on the console

    Returns:
        Configured logger instance
    """
    console_level = logging.DEBUG if verbose else logging.INFO

    if not execute:
        logging.basicConfig(
            level=console_level,
            format="%(message)s",
            stream=sys.stderr,
        )
        return logging.getLogger(script_name)

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = time.strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"{script_name}_{timestamp}.log"

    # File handler: DEBUG and above (detailed logs)
    file_handler = FlushingFileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    # The command logger and company_match.* loggers share the file; each gets
    # its own console handler (INFO and above unless verbose)
    logger = logging.getLogger(script_name)
    for target in (logger, logging.getLogger("company_match")):
        target.setLevel(logging.DEBUG)
        target.handlers = []
        target.addHandler(file_handler)
        target.addHandler(_console_handler(console_level, tqdm_compatible))
        target.propagate = False

    # tldextract warns about its suffix list cache on every first use
    logging.getLogger("tldextract").setLevel(logging.ERROR)

    logger.info(f"Log file: {log_file}")
    return logger


def print_dry_run_header(title: str, logger: logging.Logger | None = None):
    """
    Print a standard dry-run header.

    Args:
        title: Title for the dry-run section
        logger: Optional logger instance
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.info("=" * 70)
    logger.info(f"{title} (Dry Run)")
    logger.info("=" * 70)


def print_execute_header(title: str, logger: logging.Logger | None = None):
    """
    Print a standard execute mode header.

    Args:
        title: Title for the execute section
        logger: Optional logger instance
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.info("=" * 70)
    logger.info(title)
    logger.info("=" * 70)
