#!/usr/bin/env python3
"""Tests for the remove, switch-off and remove-items steps."""

import copy

from pastecleaner.document.model import EntityDocument
from pastecleaner.transforms.base import TransformRequest
from pastecleaner.transforms.filtering import (
    NO_PATTERNS,
    RemoveItemsTransform,
    RemovePrefabsTransform,
    SwitchOffPrefabsTransform,
)

FOUNDATION = "assets/prefabs/building core/foundation/foundation.prefab"
BED = "assets/prefabs/deployable/bed/bed_deployed.prefab"
BOOMBOX = "assets/prefabs/voiceaudio/boombox/boombox.deployed.prefab"
WOODBOX = "assets/prefabs/deployable/woodenbox/woodbox_deployed.prefab"

REQUEST = TransformRequest()


class TestRemovePrefabsTransform:
    """Tests for RemovePrefabsTransform."""

    def test_removes_matching(self, document):
        """Matching entities are deleted."""
        result = RemovePrefabsTransform(["assets/prefabs/deployable/bed/*"]).apply(document, REQUEST)

        assert result.success and result.changed == 1
        assert BED not in [e.prefab for e in document.entities]
        assert len(document) == 7

    def test_output_is_subsequence(self, document):
        """Remaining entities keep their order and nothing is inserted."""
        before = [id(e.data) for e in document.entities]
        RemovePrefabsTransform([FOUNDATION, "assets/prefabs/building/*"]).apply(document, REQUEST)
        after = [id(e.data) for e in document.entities]

        assert after == [record for record in before if record in after]
        assert len(after) == 4

    def test_idempotent(self, document):
        """A second pass removes nothing."""
        transform = RemovePrefabsTransform(["assets/prefabs/deployable/*"])
        transform.apply(document, REQUEST)
        snapshot = copy.deepcopy(document.root)

        result = transform.apply(document, REQUEST)
        assert result.changed == 0
        assert document.root == snapshot

    def test_skipped_without_patterns(self, document):
        """An empty pattern list skips the step."""
        result = RemovePrefabsTransform([]).apply(document, REQUEST)

        assert result.skipped is True
        assert result.reason == NO_PATTERNS
        assert len(document) == 8

    def test_records_without_prefab_survive(self):
        """Records lacking a prefab name are never matched."""
        document = EntityDocument({"entities": [{"ownerid": 1}, "junk", {"prefabname": BED}]})
        RemovePrefabsTransform(["assets/*"]).apply(document, REQUEST)

        assert document.root["entities"] == [{"ownerid": 1}, "junk"]


class TestSwitchOffPrefabsTransform:
    """Tests for SwitchOffPrefabsTransform."""

    def test_switches_off(self, document):
        """The On flag of matching entities is dropped."""
        result = SwitchOffPrefabsTransform([BOOMBOX]).apply(document, REQUEST)

        boombox = next(e for e in document.entities if e.prefab == BOOMBOX)
        assert result.changed == 1
        assert boombox.is_on is False
        assert boombox.data["flags"] == {"Reserved8": True}

    def test_unmatched_untouched(self, document):
        """Entities outside the patterns keep their flags."""
        SwitchOffPrefabsTransform(["assets/other/*"]).apply(document, REQUEST)
        boombox = next(e for e in document.entities if e.prefab == BOOMBOX)
        assert boombox.is_on is True

    def test_idempotent(self, document):
        """Entities already off are not counted again."""
        transform = SwitchOffPrefabsTransform(["assets/prefabs/voiceaudio/*"])
        assert transform.apply(document, REQUEST).changed == 1
        assert transform.apply(document, REQUEST).changed == 0


class TestRemoveItemsTransform:
    """Tests for RemoveItemsTransform."""

    def test_empties_items(self, document):
        """Matching containers keep existing with no items."""
        result = RemoveItemsTransform(["assets/prefabs/deployable/woodenbox/*"]).apply(document, REQUEST)

        box = next(e for e in document.entities if e.prefab == WOODBOX)
        assert result.changed == 1
        assert result.metadata == {"items_removed": 2}
        assert box.data["items"] == []
        assert len(document) == 8

    def test_idempotent(self, document):
        """Emptied containers are not counted again."""
        transform = RemoveItemsTransform([WOODBOX])
        transform.apply(document, REQUEST)
        assert transform.apply(document, REQUEST).changed == 0
