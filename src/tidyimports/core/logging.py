"""Logging configuration for tidyimports.

Two loggers are used. The audit logger records every file the tool rewrites,
one line per rewrite, so a bad run can be traced afterwards. The debug logger
carries diagnostics and tracing and always echoes to stderr.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

# Constants
AUDIT_LOGGER = "tidyimports.audit"
DEBUG_LOGGER = "tidyimports.debug"
AUDIT_FORMAT = "%(asctime)s - %(levelname)s - [AUDIT] %(message)s"
DEBUG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(log_dir: Optional[Path] = None, debug: bool = False) -> None:
    """Configure logging for tidyimports.

    Safe to call repeatedly; earlier handlers are closed and replaced.

    Args:
        log_dir: Directory for the daily log files. If None, only stderr is used.
        debug: Whether to enable debug logging (and the debug log file).
    """
    audit_logger = _fresh_logger(AUDIT_LOGGER, logging.INFO)
    debug_logger = _fresh_logger(DEBUG_LOGGER, logging.DEBUG if debug else logging.INFO)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
    debug_logger.addHandler(console_handler)

    if not log_dir:
        return

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    audit_logger.addHandler(_daily_file_handler(log_dir, "audit", AUDIT_FORMAT))
    if debug:
        debug_logger.addHandler(_daily_file_handler(log_dir, "debug", DEBUG_FORMAT))


def _fresh_logger(name: str, level: int) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    return logger


def _daily_file_handler(log_dir: Path, kind: str, fmt: str) -> logging.Handler:
    handler = logging.FileHandler(log_dir / f"tidyimports_{kind}_{datetime.now():%Y%m%d}.log")
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def get_audit_logger() -> logging.Logger:
    """Get the audit logger."""
    return logging.getLogger(AUDIT_LOGGER)


def get_debug_logger() -> logging.Logger:
    """Get the debug logger."""
    return logging.getLogger(DEBUG_LOGGER)


def audit_rewrite(path: Path, start: int, end: int, new_length: int) -> None:
    """Record that the import block of a file was rewritten."""
    get_audit_logger().info(
        f"Rewrote imports in {path}: offsets {start}-{end} replaced by {new_length} characters"
    )
