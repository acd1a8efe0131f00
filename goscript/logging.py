"""goscript logging with coloured console output and optional JSON files.

Every handler writes to stderr or a file. Standard output is reserved for
listing and completion results, which the shell consumes verbatim.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAMESPACE = "goscript"
LOG_FILE_NAME = "goscript.log"


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data = {
            "ts": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Extra fields attached by resolver and listing calls
        for key in ["spec", "path", "root", "mode"]:
            if hasattr(record, key):
                log_data[key] = str(getattr(record, key))

        return json.dumps(log_data)


class ConsoleFormatter(logging.Formatter):
    """Colored console formatter for human-readable output."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        timestamp = datetime.now().strftime("%H:%M:%S")
        return f"{color}{timestamp} {record.levelname:8s}{self.RESET} {record.getMessage()}"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the goscript namespace.

    Args:
        name: Logger name (typically the module's short name)

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def setup_logging(
    level: str = "warn",
    log_dir: str | Path | None = None,
    json_output: bool = True,
    console_output: bool = True,
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
) -> None:
    """Set up logging configuration.

    Args:
        level: Log level (debug, info, warn, error)
        log_dir: Directory for log files
        json_output: Whether to output JSON logs to file
        console_output: Whether to output to stderr
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of backup files to keep
    """
    level_name = "WARNING" if level.lower() == "warn" else level.upper()
    log_level = getattr(logging, level_name, logging.WARNING)

    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(ConsoleFormatter())
        root_logger.addHandler(console_handler)

    if log_dir and json_output:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path / LOG_FILE_NAME,
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(JsonFormatter())
        root_logger.addHandler(file_handler)

    # Keep records away from whatever the host application configured
    root_logger.propagate = False


# Initialize default logging on import
setup_logging(console_output=True, json_output=False)
