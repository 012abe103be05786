#!/usr/bin/env python3
"""Tests for the document model."""

import io
import json

import pytest

from pastecleaner.core.constants import ErrorCode
from pastecleaner.core.errors import InputError
from pastecleaner.document.model import (
    Entity,
    EntityDocument,
    dump_document,
    load_document,
    parse_document,
)


class TestEntity:
    """Tests for Entity capability accessors."""

    def test_owner(self):
        """Owner field presence is distinct from its value."""
        assert Entity({"ownerid": 0}).has_owner is True
        assert Entity({"ownerid": 0}).owner_id == 0
        assert Entity({}).has_owner is False
        assert Entity({}).owner_id is None

    @pytest.mark.parametrize("value", [True, None, "abc", 1.5])
    def test_owner_field_without_number(self, value):
        """Any owner field counts as an owner, only numbers give an id."""
        entity = Entity({"ownerid": value})
        assert entity.has_owner is True
        assert entity.owner_id is None

    @pytest.mark.parametrize("value, expected", [("42", 42), (7.0, 7)])
    def test_owner_id_coerced(self, value, expected):
        assert Entity({"ownerid": value}).owner_id == expected

    def test_set_owner(self):
        """Setting the owner writes the record."""
        data = {"ownerid": 0}
        Entity(data).owner_id = 42
        assert data == {"ownerid": 42}

    def test_lock_kinds(self):
        """Locks with a code are code locks, others are key locks."""
        code = Entity({"lock": {"code": "1234"}})
        key = Entity({"lock": {}})
        none = Entity({})

        assert code.has_code_lock and not code.has_key_lock
        assert key.has_key_lock and not key.has_code_lock
        assert not none.has_lock
        assert code.lock_code == "1234"
        assert key.lock_code is None

    def test_null_code_is_a_code_lock(self):
        """A code field set to null still marks a code lock."""
        data = {"lock": {"code": None}}
        entity = Entity(data)

        assert entity.has_code_lock and not entity.has_key_lock
        assert entity.lock_code == ""
        assert entity.set_lock_code("4321") is True
        assert data == {"lock": {"code": "4321"}}

    def test_set_lock_code_only_on_code_locks(self):
        """Key locks never get a code."""
        key = {"lock": {"prefabname": "key"}}
        assert Entity(key).set_lock_code("9999") is False
        assert key == {"lock": {"prefabname": "key"}}

        code = {"lock": {"code": "1111"}}
        assert Entity(code).set_lock_code("9999") is True
        assert code == {"lock": {"code": "9999"}}

    def test_remove_lock(self):
        """Removing a lock deletes the whole sub-record."""
        data = {"prefabname": "door", "lock": {"code": "1111"}}
        assert Entity(data).remove_lock() is True
        assert data == {"prefabname": "door"}
        assert Entity(data).remove_lock() is False

    def test_switch_off(self):
        """Switching off drops the On flag and keeps other flags."""
        data = {"flags": {"On": True, "Reserved8": True}}
        entity = Entity(data)

        assert entity.is_on is True
        assert entity.switch_off() is True
        assert data == {"flags": {"Reserved8": True}}
        assert entity.is_on is False
        assert entity.switch_off() is False

    def test_off_flag_untouched(self):
        """An explicit false flag is already off."""
        data = {"flags": {"On": False}}
        assert Entity(data).switch_off() is False
        assert data == {"flags": {"On": False}}

    def test_clear_items(self):
        """Clearing items empties the list in place."""
        items = [{"id": 1}, {"id": 2}]
        entity = Entity({"items": items})

        assert entity.clear_items() == 2
        assert items == []
        assert entity.has_items is False
        assert entity.clear_items() == 0

    def test_placement(self):
        """Position and rotation default missing axes to zero."""
        entity = Entity({"pos": {"x": 1, "y": "2.5"}, "skinid": 77})
        assert entity.position == (1.0, 2.5, 0.0)
        assert entity.rotation == (0.0, 0.0, 0.0)
        assert entity.skin_id == 77


class TestEntityDocument:
    """Tests for EntityDocument."""

    def test_entities(self, document):
        """Entities are exposed in document order."""
        prefabs = [e.prefab for e in document.entities]
        assert len(prefabs) == 8
        assert prefabs[0].endswith("foundation.prefab")

    def test_missing_entities(self):
        """A document without entities has none."""
        document = EntityDocument({"protocol": {}})
        assert document.entities == []
        assert len(document) == 0

    def test_entities_must_be_list(self):
        """A non-list entity collection is rejected."""
        with pytest.raises(InputError):
            EntityDocument({"entities": {}})

    def test_retain_preserves_order(self, document):
        """Retained records keep their relative order."""
        before = [e.prefab for e in document.entities]
        removed = document.retain([0, 2, 7])

        assert removed == 5
        assert [e.prefab for e in document.entities] == [before[0], before[2], before[7]]

    def test_retain_everything(self, sample_data):
        """Retaining all records leaves the list object alone."""
        records = sample_data["entities"]
        document = EntityDocument(sample_data)

        assert document.retain(range(len(records))) == 0
        assert document.root["entities"] is records

    def test_major_version(self, document):
        """The major version is read from protocol.version.Major."""
        assert document.major_version == 4
        assert EntityDocument({}).major_version is None


class TestParsing:
    """Tests for parsing and serialization."""

    def test_parse_invalid_json(self):
        """Invalid JSON is an input error."""
        with pytest.raises(InputError, match="Not a valid json file"):
            parse_document("{not json")

    def test_parse_non_object(self):
        """Top-level arrays are rejected."""
        with pytest.raises(InputError):
            parse_document("[]")

    def test_load_missing_file(self, temp_dir):
        """Missing files are reported as not found."""
        with pytest.raises(InputError) as exc_info:
            load_document(temp_dir / "missing.json")
        assert exc_info.value.error_code == ErrorCode.NOT_FOUND

    def test_load_keeps_source(self, document_file):
        """Loaded documents remember their path."""
        document = load_document(document_file)
        assert document.source == document_file

    def test_unknown_keys_round_trip(self):
        """Keys the model does not know are written back unchanged."""
        text = json.dumps(
            {
                "custom": {"nested": [1, 2]},
                "entities": [{"prefabname": "a", "extra": {"k": "v"}, "ownerid": 5}],
            }
        )
        document = parse_document(text)
        stream = io.StringIO()
        dump_document(document, stream)

        assert json.loads(stream.getvalue()) == json.loads(text)

    def test_dump_indent(self, document):
        """Documents are written indented with a trailing newline."""
        stream = io.StringIO()
        dump_document(document, stream, indent=2)

        assert stream.getvalue().startswith('{\n  "')
        assert stream.getvalue().endswith("}\n")
