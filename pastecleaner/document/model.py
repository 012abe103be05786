#!/usr/bin/env python3
"""In-memory model of a copied base document.

The document keeps the parsed JSON tree as-is, so keys this module does not
know about are written back unchanged. Entities are exposed through the
Entity wrapper, whose capability checks (has_owner, has_lock, is_on,
has_items) replace free-form path queries into the tree.

Example:
    >>> document = parse_document('{"entities": [{"prefabname": "a", "ownerid": 0}]}')
    >>> [e.prefab for e in document.entities]
    ['a']
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, TextIO, Tuple, Union

from pastecleaner.core.constants import DocumentKey, ErrorCode
from pastecleaner.core.errors import InputError
from pastecleaner.core.file_ops import read_text

Vector = Tuple[float, float, float]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_int(value: Any) -> Optional[int]:
    """Read an integer written as a number or a numeric string."""
    if _is_int(value):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


class Entity:
    """View over one entity record of a document.

    Mutations go straight to the underlying dict.
    """

    __slots__ = ("data",)

    def __init__(self, data: Dict[str, Any]):
        self.data = data

    @property
    def prefab(self) -> Optional[str]:
        value = self.data.get(DocumentKey.PREFAB)
        return value if isinstance(value, str) else None

    # Ownership

    @property
    def has_owner(self) -> bool:
        """True when the entity carries an owner id field, whatever its value."""
        return DocumentKey.OWNER in self.data

    @property
    def owner_id(self) -> Optional[int]:
        """The owner id, or None when absent or not a number."""
        return _as_int(self.data.get(DocumentKey.OWNER))

    @owner_id.setter
    def owner_id(self, value: int) -> None:
        self.data[DocumentKey.OWNER] = value

    # Locks

    @property
    def lock(self) -> Optional[Dict[str, Any]]:
        value = self.data.get(DocumentKey.LOCK)
        return value if isinstance(value, dict) else None

    @property
    def has_lock(self) -> bool:
        return self.lock is not None

    @property
    def has_code_lock(self) -> bool:
        """True when the lock has a code field, even a null one."""
        lock = self.lock
        return lock is not None and DocumentKey.LOCK_CODE in lock

    @property
    def has_key_lock(self) -> bool:
        return self.has_lock and not self.has_code_lock

    @property
    def lock_code(self) -> Optional[str]:
        """The code as text ("" for a null code), None without a code lock."""
        if not self.has_code_lock:
            return None
        code = self.lock[DocumentKey.LOCK_CODE]
        return "" if code is None else str(code)


    def set_lock_code(self, code: str) -> bool:
        """Overwrite the code of a combination lock; key locks are left alone."""
        if not self.has_code_lock:
            return False
        self.lock[DocumentKey.LOCK_CODE] = code
        return True

    def remove_lock(self) -> bool:
        if not self.has_lock:
            return False
        del self.data[DocumentKey.LOCK]
        return True

    # On/off flag

    @property
    def is_on(self) -> bool:
        flags = self.data.get(DocumentKey.FLAGS)
        return isinstance(flags, dict) and flags.get(DocumentKey.FLAG_ON) is True

    def switch_off(self) -> bool:
        """Drop the On flag; its absence is the off state."""
        if not self.is_on:
            return False
        del self.data[DocumentKey.FLAGS][DocumentKey.FLAG_ON]
        return True

    # Items

    @property
    def items(self) -> Optional[List[Any]]:
        value = self.data.get(DocumentKey.ITEMS)
        return value if isinstance(value, list) else None

    @property
    def has_items(self) -> bool:
        return bool(self.items)

    def clear_items(self) -> int:
        """Empty the item list, returning how many items were removed."""
        items = self.items
        if not items:
            return 0
        count = len(items)
        items.clear()
        return count

    # Placement

    @property
    def position(self) -> Vector:
        return _vector(self.data.get(DocumentKey.POSITION))

    @property
    def rotation(self) -> Vector:
        return _vector(self.data.get(DocumentKey.ROTATION))

    @property
    def skin_id(self) -> int:
        value = self.data.get(DocumentKey.SKIN)
        return value if _is_int(value) else 0

    def __repr__(self) -> str:
        return f"<Entity prefab={self.prefab!r} owner={self.owner_id}>"


def _vector(value: Any) -> Vector:
    if not isinstance(value, dict):
        return (0.0, 0.0, 0.0)

    def axis(name: str) -> float:
        raw = value.get(name, 0)
        try:
            return float(raw)
        except (TypeError, ValueError):
            return 0.0

    return (axis("x"), axis("y"), axis("z"))


class EntityDocument:
    """A parsed copied base document."""

    def __init__(self, root: Dict[str, Any], source: Optional[Union[str, Path]] = None):
        """Initialize document.

        Args:
            root: Parsed JSON object
            source: Path the document was loaded from, if any

        Raises:
            InputError: If the entity collection is not a list
        """
        entities = root.get(DocumentKey.ENTITIES)
        if entities is not None and not isinstance(entities, list):
            raise InputError("Document 'entities' must be a list")
        self.root = root
        self.source = Path(source) if source is not None else None

    @property
    def entities(self) -> List[Entity]:
        """Entity views in document order (non-object records are skipped)."""
        return [Entity(record) for record in self._records() if isinstance(record, dict)]

    def _records(self) -> List[Any]:
        return self.root.get(DocumentKey.ENTITIES) or []

    def __len__(self) -> int:
        return len(self._records())

    def retain(self, keep: Iterable[int]) -> int:
        """Keep only the records at the given positions.

        The new collection is materialized from the retained positions, in
        original order.

        Returns:
            Number of records removed
        """
        records = self._records()
        kept = set(keep)
        new_records = [record for index, record in enumerate(records) if index in kept]
        removed = len(records) - len(new_records)
        if removed:
            self.root[DocumentKey.ENTITIES] = new_records
        return removed

    def indexed_entities(self) -> List[Tuple[int, Entity]]:
        """(position, entity) pairs for every object record."""
        return [
            (index, Entity(record))
            for index, record in enumerate(self._records())
            if isinstance(record, dict)
        ]

    @property
    def major_version(self) -> Any:
        """Raw value of protocol.version.Major, or None if absent."""
        protocol = self.root.get(DocumentKey.PROTOCOL)
        if not isinstance(protocol, dict):
            return None
        version = protocol.get(DocumentKey.VERSION)
        if not isinstance(version, dict):
            return None
        return version.get(DocumentKey.MAJOR)


def parse_document(text: str, source: Optional[Union[str, Path]] = None) -> EntityDocument:
    """Parse document text.

    Raises:
        InputError: If text is not a JSON object
    """
    try:
        root = json.loads(text)
    except json.JSONDecodeError as e:
        raise InputError(f"Not a valid json file: {e}") from e
    if not isinstance(root, dict):
        raise InputError("Not a valid document: top-level value must be an object")
    return EntityDocument(root, source)


def load_document(path: Union[str, Path]) -> EntityDocument:
    """Load a document from disk.

    Raises:
        InputError: If the file is missing, unreadable or not a JSON object
    """
    path = Path(path)
    if not path.exists():
        raise InputError(f"Input file can not be found: '{path}'", ErrorCode.NOT_FOUND)
    return parse_document(read_text(path), path)


def dump_document(document: EntityDocument, stream: TextIO, indent: int = 2) -> None:
    """Serialize a document into a text stream."""
    json.dump(document.root, stream, indent=indent, ensure_ascii=False)
    stream.write("\n")
