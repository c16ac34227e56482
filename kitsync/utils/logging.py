"""Logging configuration for KITSYNC.

Logging is controlled by environment variables so that it stays out of
the way of normal interactive use.

Environment Variables:
    KITSYNC_LOG: Set to "true" to enable logging (default: "false")
    KITSYNC_LOG_FILE: Path to log file (default: ~/.kitsync.log)
"""

import logging
import os
import threading
from pathlib import Path

LOG_ENABLED = os.environ.get("KITSYNC_LOG", "false").lower() == "true"
LOG_FILE = Path(os.environ.get("KITSYNC_LOG_FILE", str(Path.home() / ".kitsync.log")))

_logger: logging.Logger | None = None
_setup_lock = threading.Lock()


def setup_logging() -> logging.Logger:
    """Configure logging based on environment variables.

    Creates a logger that writes to the configured log file when
    KITSYNC_LOG is set to "true". Otherwise, uses a NullHandler
    to suppress all log output.

    Returns:
        Configured logger instance
    """
    global _logger

    # Sync workers may log before the CLI has configured anything
    with _setup_lock:
        if _logger is not None:
            return _logger

        logger = logging.getLogger("kitsync")
        logger.handlers.clear()

        if LOG_ENABLED:
            LOG_FILE.parent.mkdir(parents=True, exist_ok=True)

            handler = logging.FileHandler(LOG_FILE)
            handler.setFormatter(
                logging.Formatter(
                    "[%(asctime)s] [%(threadName)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            logger.addHandler(handler)
            logger.setLevel(logging.INFO)
        else:
            logger.addHandler(logging.NullHandler())

        _logger = logger
        return logger


def get_logger() -> logging.Logger:
    """Get the configured logger instance, creating it if necessary."""
    if _logger is None:
        return setup_logging()
    return _logger


def log_message(message: str) -> None:
    """Log a message if logging is enabled.

    This is the primary logging function used throughout the application.
    Messages are only written to the log file if KITSYNC_LOG=true.

    Args:
        message: Message to log
    """
    get_logger().info(message)


def log_command(command: str, exit_code: int = 0) -> None:
    """Log command execution with exit code.

    Used to track external command execution (git, npm) for debugging.

    Args:
        command: The command that was executed
        exit_code: The exit code returned by the command
    """
    get_logger().info(f"COMMAND: {command} | EXIT_CODE: {exit_code}")


__all__ = [
    "LOG_ENABLED",
    "LOG_FILE",
    "setup_logging",
    "get_logger",
    "log_message",
    "log_command",
]
