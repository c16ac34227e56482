"""Custom exceptions and exit codes for KITSYNC.

This module defines the exit codes and exception hierarchy used throughout
the application.
"""

from enum import IntEnum
from typing import ClassVar


class ExitCode(IntEnum):
    """Process exit codes.

    These codes are used for consistent error reporting and can be
    checked by calling scripts or CI systems.
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PROJECT_NOT_FOUND = 2
    CONFIG_ERROR = 3
    USER_CANCELLED = 4
    GIT_ERROR = 5
    NPM_ERROR = 6
    ARTIFACT_NOT_FOUND = 7


class KitsyncError(Exception):
    """Base exception for KITSYNC errors.

    All custom exceptions in this application should inherit from this class.
    Each exception type has an associated exit code for proper error reporting.

    Attributes:
        exit_code: The exit code to use when this exception causes program termination
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.GENERAL_ERROR

    def __init__(self, message: str, exit_code: ExitCode | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message describing what went wrong
            exit_code: Optional override for the default exit code
        """
        super().__init__(message)
        self._exit_code = exit_code

    @property
    def exit_code(self) -> ExitCode:
        """Instance exit code if set, otherwise the class default."""
        if self._exit_code is not None:
            return self._exit_code
        return self.__class__._default_exit_code


class ProjectNotFoundError(KitsyncError):
    """No consumer project (directory with package.json) could be located."""

    _default_exit_code: ClassVar[ExitCode] = ExitCode.PROJECT_NOT_FOUND


class ConfigError(KitsyncError):
    """Configuration is missing or invalid.

    Raised when:
    - No repository URL is configured for the requested kind
    - A config value cannot be parsed
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.CONFIG_ERROR


class UserCancelledError(KitsyncError):
    """User cancelled the operation.

    Raised when:
    - User presses Ctrl+C
    - User dismisses a prompt
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.USER_CANCELLED


class GitOperationError(KitsyncError):
    """A git command failed.

    Attributes:
        command: The git command line that failed
        returncode: Exit status of the command
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.GIT_ERROR

    def __init__(
        self,
        message: str,
        command: str = "",
        returncode: int | None = None,
        exit_code: ExitCode | None = None,
    ) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(message, exit_code)


class NpmError(KitsyncError):
    """An npm command failed.

    Attributes:
        command: The npm command line that failed
        returncode: Exit status of the command
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.NPM_ERROR

    def __init__(
        self,
        message: str,
        command: str = "",
        returncode: int | None = None,
        exit_code: ExitCode | None = None,
    ) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(message, exit_code)


class ArtifactNotFoundError(KitsyncError):
    """A named artifact does not exist in the shared repository.

    Attributes:
        name: The artifact name that was looked up
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.ARTIFACT_NOT_FOUND

    def __init__(self, name: str, exit_code: ExitCode | None = None) -> None:
        self.name = name
        super().__init__(f"Artifact not found: {name}", exit_code)


class InvalidPlanError(KitsyncError):
    """The requested combination of runner operations is not allowed."""


__all__ = [
    "ExitCode",
    "KitsyncError",
    "ProjectNotFoundError",
    "ConfigError",
    "UserCancelledError",
    "GitOperationError",
    "NpmError",
    "ArtifactNotFoundError",
    "InvalidPlanError",
]
