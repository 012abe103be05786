"""
PasteCleaner Core: Error Hierarchy.

Every failure the tool reports to the user derives from CleanerError and
carries an ErrorCode plus an optional remediation hint.
"""
from typing import Optional

from pastecleaner.core.constants import ErrorCode


class CleanerError(Exception):
    """Base exception for PasteCleaner errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INVALID_INPUT,
        hint: Optional[str] = None,
    ):
        """Initialize CleanerError.

        Args:
            message: Error message
            error_code: Associated error code
            hint: Optional remediation hint shown to the user
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.hint = hint


class UsageError(CleanerError):
    """Missing or invalid command-line arguments, ambiguous filter selection."""


class InputError(CleanerError):
    """Input file missing, unreadable or not a supported document."""


class NotARecognizedDocument(InputError):
    """Document has no major version field."""


class UnsupportedVersion(InputError):
    """Document major version differs from the supported one."""

    def __init__(self, found: int, expected: int):
        super().__init__(
            f"Major version {found} is not supported (expected {expected})",
            ErrorCode.INVALID_INPUT,
        )
        self.found = found
        self.expected = expected


class ConfigurationError(CleanerError):
    """Settings file missing, invalid or inconsistent."""


class CommitError(CleanerError):
    """Writing, deleting or moving an output file failed."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        temp_path: Optional[str] = None,
    ):
        super().__init__(message, error_code)
        self.temp_path = temp_path
