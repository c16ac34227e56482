"""Utility modules for KITSYNC.

This package contains:
- console: Rich-based terminal output utilities
- errors: Custom exceptions and exit codes
- logging: Logging configuration
"""

from kitsync.utils.console import (
    console,
    print_error,
    print_header,
    print_info,
    print_step,
    print_success,
    print_warning,
    separator,
)
from kitsync.utils.errors import (
    ArtifactNotFoundError,
    ConfigError,
    ExitCode,
    GitOperationError,
    InvalidPlanError,
    KitsyncError,
    NpmError,
    ProjectNotFoundError,
    UserCancelledError,
)
from kitsync.utils.logging import log_command, log_message, setup_logging

__all__ = [
    # Console
    "console",
    "print_error",
    "print_success",
    "print_warning",
    "print_info",
    "print_header",
    "print_step",
    "separator",
    # Errors
    "ExitCode",
    "KitsyncError",
    "ProjectNotFoundError",
    "ConfigError",
    "UserCancelledError",
    "GitOperationError",
    "NpmError",
    "ArtifactNotFoundError",
    "InvalidPlanError",
    # Logging
    "setup_logging",
    "log_message",
    "log_command",
]
