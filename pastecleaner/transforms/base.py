#!/usr/bin/env python3
"""Base classes for document transformations.

This module provides the foundation for all pipeline steps:
- TransformRequest carrying the parameters of one run
- Transform abstract base class
- TransformResult describing what a step did or why it was skipped
- TransformError for error handling

Example:
    >>> class CountTransform(Transform):
    ...     def transform(self, document, request):
    ...         return len(document)
    ...
    >>> result = CountTransform().apply(document, TransformRequest())
    >>> result.changed
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pastecleaner.core.constants import AUTO_ASSIGN_OWNER, ErrorCode
from pastecleaner.core.errors import CleanerError
from pastecleaner.document.model import EntityDocument


@dataclass(frozen=True)
class TransformRequest:
    """Parameters controlling one pipeline run."""

    filter_id: Optional[str] = None
    new_owner_id: int = AUTO_ASSIGN_OWNER
    lock_code: Optional[str] = None
    remove_all_locks: bool = False
    extra_strip_patterns: List[str] = field(default_factory=list)


@dataclass
class TransformResult:
    """Result of one transformation step."""

    transform_name: str
    changed: int = 0
    success: bool = True
    skipped: bool = False
    reason: Optional[str] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class TransformError(CleanerError):
    """Error during transformation."""

    def __init__(self, message: str, transform_name: Optional[str] = None):
        super().__init__(message, ErrorCode.INTERNAL_ERROR)
        self.transform_name = transform_name


class TransformSkipped(Exception):
    """Raised by a transform that finds nothing it can act on."""


class Transform(ABC):
    """Abstract base class for document transformations.

    All transforms must implement:
    - transform(): Mutate the document, return the number of changes

    Optional overrides:
    - skip_reason(): Why the step does not apply to a request
    - get_metadata(): Extra details reported with the result
    """

    #: Progress label written to the log
    description: str = "Transforming"

    def __init__(self, name: Optional[str] = None):
        """Initialize transform.

        Args:
            name: Step name used in reports (default: class name)
        """
        self.name = name or self.__class__.__name__

    @abstractmethod
    def transform(self, document: EntityDocument, request: TransformRequest) -> int:
        """Mutate the document in place.

        Returns:
            Number of entities (or records) changed

        Raises:
            TransformError: If transformation fails
        """

    def skip_reason(self, request: TransformRequest) -> Optional[str]:
        """Return a reason to skip this step, or None to run it."""
        return None

    def get_metadata(self) -> Dict[str, Any]:
        return {}

    def apply(self, document: EntityDocument, request: TransformRequest) -> TransformResult:
        """Apply the transformation, capturing skips and failures in the result."""
        reason = self.skip_reason(request)
        if reason is not None:
            return TransformResult(self.name, skipped=True, reason=reason)

        try:
            changed = self.transform(document, request)
        except TransformSkipped as e:
            return TransformResult(self.name, skipped=True, reason=str(e))
        except Exception as e:
            return TransformResult(
                self.name,
                success=False,
                error=f"{self.name}: {e}",
            )

        return TransformResult(self.name, changed=changed, metadata=self.get_metadata())

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name}>"
