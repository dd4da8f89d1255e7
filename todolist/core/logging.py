"""Logging configuration with correlation ID support."""

import logging
import sys

from todolist.core.middleware import correlation_id_var

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(correlation_id)s | %(name)s | %(message)s"

# Third-party loggers that are noisy at INFO
_QUIET_LOGGERS = ("uvicorn", "uvicorn.access", "sqlalchemy.engine", "aiosqlite")


class CorrelationIdFilter(logging.Filter):
    """Logging filter that adds correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add correlation_id to the log record (``-`` outside a request)."""
        record.correlation_id = correlation_id_var.get("") or "-"
        return True


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging with correlation ID support.

    Replaces any handlers on the root logger with a single stdout handler.

    Args:
        log_level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(CorrelationIdFilter())
    root_logger.addHandler(console_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
