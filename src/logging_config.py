"""
Logging Configuration for the Award Eligibility Engine

Library modules only call logging.getLogger(__name__); an application embedding
the engine calls setup_logging() once to decide where records go.

Usage Example:
    from logging_config import setup_logging, setup_eligibility_logging

    setup_logging(level="INFO", log_dir="logs")
    setup_eligibility_logging(level="DEBUG")   # cutoffs and excluded teams

Log Files Created:
- logs/award_eligibility.log: Main log (INFO+)
- logs/award_eligibility_debug.log: Debug log (DEBUG+)
- logs/award_eligibility_error.log: Error log (ERROR+)

Each file rotates at 10MB with 5 backups.
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional


DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_PREFIX = "award_eligibility"

ELIGIBILITY_MODULES = (
    "award_system",
    "award_system.eligibility_manager",
    "award_system.eligibility_evaluator",
    "award_system.batch_runner",
)


class ColoredFormatter(logging.Formatter):
    """Console formatter with ANSI-colored level names."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        levelname = record.levelname
        if levelname in self.COLORS:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        return super().format(record)


def _rotating_handler(log_dir: str, suffix: str, level: int, fmt: str,
                      max_bytes: int, backup_count: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=os.path.join(log_dir, f"{LOG_FILE_PREFIX}{suffix}.log"),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    enable_console: bool = True,
    enable_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    format_style: str = "detailed"
) -> None:
    """
    Configure the root logger.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        enable_console: Whether to log to console
        enable_file: Whether to log to rotating files
        max_bytes: Maximum size per log file before rotation
        backup_count: Number of backup files to keep
        format_style: "detailed" or "simple" format for the main log
    """
    numeric_level = getattr(logging, level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if enable_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        main_format = DETAILED_FORMAT if format_style == "detailed" else SIMPLE_FORMAT
        root_logger.addHandler(_rotating_handler(log_dir, "", logging.INFO, main_format, max_bytes, backup_count))
        root_logger.addHandler(_rotating_handler(log_dir, "_debug", logging.DEBUG, DETAILED_FORMAT, max_bytes, backup_count))
        root_logger.addHandler(_rotating_handler(log_dir, "_error", logging.ERROR, DETAILED_FORMAT, max_bytes, backup_count))

    root_logger.info(
        "Logging initialized - Level: %s, Console: %s, File: %s",
        level, enable_console, enable_file
    )


def log_exception(
    logger: logging.Logger,
    exception: Exception,
    context: Optional[dict] = None,
    level: str = "ERROR"
) -> None:
    """
    Log an exception with traceback and context.

    Example:
        >>> try:
        ...     manager.compute_eligibility(...)
        ... except EligibilityException as e:
        ...     log_exception(logger, e, context={"event_id": 51234, "division_id": 1})
    """
    context_str = ""
    if context:
        context_str = " [" + ", ".join(f"{k}={v}" for k, v in context.items()) + "]"

    logger.log(
        getattr(logging, level.upper()),
        "Exception occurred%s: %s: %s",
        context_str, type(exception).__name__, exception,
        exc_info=exception
    )


def configure_module_logger(
    module_name: str,
    level: Optional[str] = None,
    propagate: bool = True
) -> logging.Logger:
    """
    Set the level of one module's logger.

    Args:
        module_name: Logger name (e.g., "award_system.eligibility_evaluator")
        level: Log level for this module (None = inherit from root)
        propagate: Whether to propagate to parent loggers
    """
    logger = logging.getLogger(module_name)
    if level:
        logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = propagate
    return logger


class LogContext:
    """
    Context manager for a temporary log level.

    Example:
        >>> with LogContext(logging.getLogger("award_system"), "DEBUG"):
        ...     manager.compute_eligibility(...)
    """

    def __init__(self, logger: logging.Logger, level: str):
        self.logger = logger
        self.new_level = getattr(logging, level.upper())
        self.original_level = logger.level

    def __enter__(self):
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self.original_level)


def setup_eligibility_logging(level: str = "INFO") -> None:
    """Set the level of every eligibility engine logger."""
    for module_name in ELIGIBILITY_MODULES:
        configure_module_logger(module_name, level=level)
