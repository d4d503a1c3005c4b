"""
Logging utility module.

Console logging is configured by the application factory; this module adds
the optional daily log file and a helper for logging errors with context.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("lawdesk")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )


def setup_file_logging(log_dir: str = "logs") -> Path:
    """
    Set up file logging in addition to console logging.

    Args:
        log_dir: Directory to store log files

    Returns:
        Path of the log file written today
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d")
    log_file = log_path / f"lawdesk_{timestamp}.log"
    if any(
        isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_file.resolve()
        for h in logger.handlers
    ):
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)
    return log_file


def log_error(error: Exception, context: Optional[str] = None):
    """
    Log an error with optional context.

    Args:
        error: Exception to log
        context: Optional context about where the error occurred
    """
    if context:
        logger.error(f"{context}: {str(error)}")
    else:
        logger.error(str(error))

    # Full stack trace at debug level
    logger.debug("Stack trace:", exc_info=True)
