#!/usr/bin/env python3
"""Filter steps: remove, switch off and empty matching prefabs.

Each step is idempotent. A second pass finds nothing left to do because
removed entities are gone, switched-off entities no longer carry the On
flag, and stripped containers have no items.
"""

from typing import Iterable, Optional

from pastecleaner.document.model import EntityDocument
from pastecleaner.rules.patterns import PrefabMatcher
from pastecleaner.transforms.base import Transform, TransformRequest

NO_PATTERNS = "No pattern configured"


class PatternTransform(Transform):
    """Transform driven by a prefab pattern list."""

    def __init__(self, patterns: Iterable[str], name: Optional[str] = None):
        super().__init__(name=name)
        self.matcher = PrefabMatcher(patterns)

    def skip_reason(self, request: TransformRequest) -> Optional[str]:
        if not self.matcher:
            return NO_PATTERNS
        return None


class RemovePrefabsTransform(PatternTransform):
    """Delete every entity whose prefab matches."""

    description = "Removing prefab entities"

    def __init__(self, patterns: Iterable[str], name: str = "remove-prefabs"):
        super().__init__(patterns, name)

    def transform(self, document: EntityDocument, request: TransformRequest) -> int:
        matched = {
            index
            for index, entity in document.indexed_entities()
            if self.matcher.matches(entity.prefab)
        }
        keep = [index for index in range(len(document)) if index not in matched]
        return document.retain(keep)


class SwitchOffPrefabsTransform(PatternTransform):
    """Switch off matching entities that are currently on."""

    description = "Switching off prefab entities"

    def __init__(self, patterns: Iterable[str], name: str = "switch-off-prefabs"):
        super().__init__(patterns, name)

    def transform(self, document: EntityDocument, request: TransformRequest) -> int:
        targets = [e for e in document.entities if self.matcher.matches(e.prefab) and e.is_on]
        for entity in targets:
            entity.switch_off()
        return len(targets)


class RemoveItemsTransform(PatternTransform):
    """Empty the item list of matching entities."""

    description = "Removing items from prefab entities"

    def __init__(self, patterns: Iterable[str], name: str = "remove-items"):
        super().__init__(patterns, name)
        self._items_removed = 0

    def transform(self, document: EntityDocument, request: TransformRequest) -> int:
        self._items_removed = 0
        changed = 0
        for entity in document.entities:
            if self.matcher.matches(entity.prefab) and entity.has_items:
                self._items_removed += entity.clear_items()
                changed += 1
        return changed

    def get_metadata(self):
        return {"items_removed": self._items_removed}
