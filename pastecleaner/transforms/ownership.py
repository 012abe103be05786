#!/usr/bin/env python3
"""Ownership step.

With an explicit owner id every entity carrying an owner field is given
that id. With the auto-assign sentinel (0), entities owned by nobody are
given to the biggest builder: the non-zero owner with the most entities.
"""

from typing import Dict, Optional

from pastecleaner.core.constants import AUTO_ASSIGN_OWNER
from pastecleaner.document.model import EntityDocument
from pastecleaner.transforms.base import Transform, TransformRequest, TransformSkipped


def count_owners(document: EntityDocument) -> Dict[int, int]:
    """Count entities per numeric owner id, in first-seen order (0 included)."""
    counts: Dict[int, int] = {}
    for entity in document.entities:
        owner = entity.owner_id
        if owner is not None:
            counts[owner] = counts.get(owner, 0) + 1
    return counts


def select_default_owner(counts: Dict[int, int]) -> Optional[int]:
    """Pick the non-zero owner with the greatest count.

    Owners are stably sorted ascending by count and the last one wins, so
    on a tie the owner seen last in the document order of first
    appearance is chosen.
    """
    candidates = [(owner, count) for owner, count in counts.items() if owner != AUTO_ASSIGN_OWNER]
    if not candidates:
        return None
    return sorted(candidates, key=lambda pair: pair[1])[-1][0]


class OwnershipTransform(Transform):
    """Assign owners to entities."""

    description = "Assigning ownership to entities"

    def __init__(self, name: str = "ownership"):
        super().__init__(name=name)
        self._assigned_owner: Optional[int] = None

    def transform(self, document: EntityDocument, request: TransformRequest) -> int:
        if request.new_owner_id != AUTO_ASSIGN_OWNER:
            owner = request.new_owner_id
            targets = [e for e in document.entities if e.has_owner]
        else:
            owner = select_default_owner(count_owners(document))
            if owner is None:
                raise TransformSkipped("No owned entity to take the biggest builder from")
            targets = [e for e in document.entities if e.owner_id == AUTO_ASSIGN_OWNER]

        self._assigned_owner = owner
        for entity in targets:
            entity.owner_id = owner
        return len(targets)

    def get_metadata(self):
        return {"owner_id": self._assigned_owner}
