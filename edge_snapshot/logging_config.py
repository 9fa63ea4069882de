"""
Logging configuration for edge-snapshot

Diagnostics go to stderr (and optionally a rotating file) so that stdout only
ever carries the rendered resources.
"""

import logging
import sys
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    max_size_mb: int = 10,
    backup_count: int = 3,
    enable_colors: bool = False,
) -> None:
    """Configure stdlib logging and structlog

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path to log file (None = stderr only)
        max_size_mb: Max log file size in MB before rotation
        backup_count: Number of backup files to keep
        enable_colors: Enable colored console output on a terminal
    """
    log_level = LEVELS.get(level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if sys.stderr.isatty():
        processors.append(structlog.dev.ConsoleRenderer(colors=enable_colors))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)


class PerformanceLogger:
    """Context manager that logs how long an operation took"""

    def __init__(self, operation: str, logger: Optional[structlog.stdlib.BoundLogger] = None):
        self.operation = operation
        self.logger = logger or get_logger("performance")
        self.start_time: Optional[float] = None
        self.duration = 0.0

    def __enter__(self):
        self.start_time = time.monotonic()
        self.logger.debug("Operation started", operation=self.operation)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.monotonic() - self.start_time

        if exc_type is None:
            self.logger.info(
                "Operation completed",
                operation=self.operation,
                duration_seconds=round(self.duration, 3),
            )
        else:
            # The failure itself is reported by the caller
            self.logger.debug(
                "Operation failed",
                operation=self.operation,
                duration_seconds=round(self.duration, 3),
                error=str(exc_val),
            )
        return False


def setup_logging_from_config(config: Dict[str, Any], debug: bool = False) -> None:
    """Setup logging from a configuration dict

    Args:
        config: Configuration dictionary with a 'logging' section
        debug: Force DEBUG level regardless of the configured one
    """
    logging_config = config.get("logging", {})

    if not logging_config.get("enabled", True) and not debug:
        logging.disable(logging.CRITICAL)
        return

    logging.disable(logging.NOTSET)
    configure_logging(
        level="DEBUG" if debug else logging_config.get("level", "WARNING"),
        log_file=logging_config.get("file"),
        max_size_mb=logging_config.get("max_size_mb", 10),
        backup_count=logging_config.get("backup_count", 3),
        enable_colors=config.get("output", {}).get("colors_enabled", False),
    )


# Initialize logging with defaults
# This will be reconfigured when config is loaded
configure_logging()
