"""
PasteCleaner Core: Constants and Type Definitions

This module provides system-wide constants, error codes, document keys
and type definitions.
"""
from enum import IntEnum
from typing import TypeAlias

# Version information
PASTECLEANER_VERSION = "1.0.0"

# Format versions understood by this engine
SUPPORTED_DOCUMENT_MAJOR = 4
SUPPORTED_SETTINGS_VERSION = 1
SPACE_DOCUMENT_VERSION = 1


class ErrorCode(IntEnum):
    """Standardized error codes for PasteCleaner operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad argument, invalid document or settings
    NOT_FOUND = 2  # File or resource doesn't exist
    PERMISSION_DENIED = 3  # Insufficient permissions
    CONFLICT = 4  # Output already exists
    INTERNAL_ERROR = 6  # Unexpected failure


# Type aliases for clarity
Pattern: TypeAlias = str
PrefabName: TypeAlias = str
OwnerId: TypeAlias = int
LockCode: TypeAlias = str


class DocumentKey:
    """Keys of the copied base document."""

    PROTOCOL = "protocol"
    VERSION = "version"
    MAJOR = "Major"
    ENTITIES = "entities"

    # Entity keys
    PREFAB = "prefabname"
    OWNER = "ownerid"
    LOCK = "lock"
    LOCK_CODE = "code"
    FLAGS = "flags"
    FLAG_ON = "On"
    ITEMS = "items"
    POSITION = "pos"
    ROTATION = "rot"
    SKIN = "skinid"


class SettingsKey:
    """Keys of the persisted settings document."""

    VERSION = "version"
    FILTERS = "filters"
    FILTER_ID = "filter-id"
    REMOVED_PREFABS = "removed-prefabs"
    SWITCHED_OFF_PREFABS = "switchedoff-prefabs"
    REMOVED_ITEMS_FROM_PREFABS = "removed-items-from-prefabs"


# Default file names
SETTINGS_FILE_NAME = "pastecleaner.json"
SCHEMA_RESOURCE = "settings.schema.json"
INFO_TEMPLATE_RESOURCE = "info.txt.j2"
DOCUMENT_SUFFIX = ".json"

# Lock codes are exactly four decimal digits
LOCK_CODE_REGEX = r"[0-9]{4}"

# Sentinel owner id selecting auto-assignment
AUTO_ASSIGN_OWNER = 0
