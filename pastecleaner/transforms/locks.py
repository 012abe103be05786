#!/usr/bin/env python3
"""Lock steps: change combination codes, remove all locks."""

from typing import Optional

from pastecleaner.document.model import EntityDocument
from pastecleaner.transforms.base import Transform, TransformRequest


class LockCodeTransform(Transform):
    """Overwrite the code of every combination lock.

    Key locks never receive a code.
    """

    description = "Changing all code locks number"

    def __init__(self, name: str = "lock-code"):
        super().__init__(name=name)

    def skip_reason(self, request: TransformRequest) -> Optional[str]:
        if request.lock_code is None:
            return "No lock code requested"
        if request.remove_all_locks:
            return "All locks are removed"
        return None

    def transform(self, document: EntityDocument, request: TransformRequest) -> int:
        return sum(1 for e in document.entities if e.set_lock_code(request.lock_code))


class LockRemovalTransform(Transform):
    """Delete every lock, code and key alike."""

    description = "Removing all code and key locks"

    def __init__(self, name: str = "lock-remove"):
        super().__init__(name=name)

    def skip_reason(self, request: TransformRequest) -> Optional[str]:
        if not request.remove_all_locks:
            return "Lock removal not requested"
        return None

    def transform(self, document: EntityDocument, request: TransformRequest) -> int:
        return sum(1 for e in document.entities if e.remove_lock())
