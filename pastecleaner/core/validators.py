"""
PasteCleaner Core: Input Validators.

Validation of command-line values before any file is touched.
"""
import re
from typing import Any, Optional

from pastecleaner.core.constants import LOCK_CODE_REGEX
from pastecleaner.core.errors import UsageError

_LOCK_CODE = re.compile(LOCK_CODE_REGEX)


def validate_lock_code(code: Optional[str]) -> Optional[str]:
    """Validate a combination lock code.

    Args:
        code: Code to validate, None when no code change was requested

    Returns:
        The code unchanged

    Raises:
        UsageError: If code is not exactly four decimal digits
    """
    if code is None:
        return None
    if not isinstance(code, str) or not _LOCK_CODE.fullmatch(code):
        raise UsageError(
            f"Lock code is not a 4 digits number: {code!r}",
            hint="Use a value such as --lock-code 1234",
        )
    return code


def validate_owner_id(owner_id: Any) -> int:
    """Validate an owner id (0 selects auto-assignment).

    Raises:
        UsageError: If owner id is not a non-negative integer
    """
    if isinstance(owner_id, bool) or not isinstance(owner_id, int) or owner_id < 0:
        raise UsageError(f"Owner id must be a non-negative integer: {owner_id!r}")
    return owner_id


def validate_filter_id(filter_id: Optional[str]) -> Optional[str]:
    """Validate a filter id given on the command line.

    Raises:
        UsageError: If filter id is an empty string
    """
    if filter_id is None:
        return None
    if not isinstance(filter_id, str) or filter_id == "":
        raise UsageError("Filter id must be a non-empty string")
    return filter_id
