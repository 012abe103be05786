#!/usr/bin/env python3
"""Settings store: named filters persisted as JSON.

The settings document is checked in two passes. The JSON Schema shipped
with the package validates its structure; the semantic checks then
require the supported settings version, at least one filter and unique
filter ids.

Example:
    >>> store = SettingsStore.load(app_config.settings_file, app_config.schema_file)
    >>> rule_set = store.select("default-clean")
"""

import json
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jsonschema

from pastecleaner.core.constants import ErrorCode, SettingsKey, SUPPORTED_SETTINGS_VERSION
from pastecleaner.core.errors import ConfigurationError, UsageError
from pastecleaner.core.file_ops import write_atomic
from pastecleaner.core.logging import get_logger
from pastecleaner.rules.filters import FilterRuleSet

INIT_HINT = "A sample file can be created by executing following command: pastecleaner init-settings"

SAMPLE_FILTERS = [
    FilterRuleSet("clean-nothing"),
    FilterRuleSet(
        "default-clean",
        remove_patterns=[
            "assets/prefabs/deployable/bed/*",
            "assets/prefabs/deployable/elevator/*",
            "assets/prefabs/deployable/playerioents/industrialadaptors/*",
            "assets/prefabs/deployable/playerioents/industrialcrafter/*",
            "assets/prefabs/deployable/sleeping bag/*",
            "assets/content/vehicles/modularcar/module_entities/*",
        ],
        deactivate_patterns=[
            "assets/prefabs/deployable/playerioents/industrialconveyor/industrialconveyor.deployed.prefab",
            "assets/prefabs/voiceaudio/boombox/boombox.deployed.prefab",
        ],
    ),
    FilterRuleSet(
        "empty-containers",
        strip_contents_patterns=[
            "assets/prefabs/deployable/woodenbox/*",
            "assets/prefabs/deployable/large wood storage/*",
            "assets/prefabs/deployable/furnace/*",
            "assets/prefabs/deployable/furnace.large/*",
            "assets/prefabs/deployable/fridge/*",
            "assets/prefabs/deployable/tool cupboard/*",
        ],
    ),
]


def sample_settings() -> Dict[str, Any]:
    """The settings document written by init-settings."""
    return {
        SettingsKey.VERSION: SUPPORTED_SETTINGS_VERSION,
        SettingsKey.FILTERS: [rule_set.to_settings() for rule_set in SAMPLE_FILTERS],
    }


def write_sample_settings(path: Union[str, Path], force: bool = False) -> Path:
    """Write the sample settings file.

    Args:
        path: Target settings file
        force: Replace an existing settings file

    Raises:
        UsageError: If the target exists and may not be replaced
        CommitError: If writing fails
    """
    path = Path(path)
    if path.is_dir():
        raise UsageError(f"Target settings file path is an existing directory: '{path}'")
    if path.exists() and not force:
        raise UsageError(
            f"A settings file already exists: '{path}'",
            ErrorCode.CONFLICT,
            hint="Use --force to replace it",
        )

    get_logger().info(f"Start writing settings file '{path}'")
    return write_atomic(path, lambda f: json.dump(sample_settings(), f, indent=2))


def _load_schema(schema_path: Union[str, Path]) -> Dict[str, Any]:
    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Settings schema can not be loaded: '{schema_path}': {e}", ErrorCode.INTERNAL_ERROR
        ) from e


def _humanize_error(error: jsonschema.ValidationError) -> str:
    """Convert a ``jsonschema.ValidationError`` into plain English."""
    path = "/".join(str(p) for p in error.absolute_path) if error.absolute_path else "(root)"
    if error.validator == "required":
        return f"Missing required field at {path}: {error.message}"
    if error.validator == "type":
        return f"Wrong data type at '{path}': {error.message}"
    return f"Issue at '{path}': {error.message}"


def validate_settings(data: Any, schema: Dict[str, Any]) -> List[FilterRuleSet]:
    """Validate a settings document and build its rule sets.

    Raises:
        ConfigurationError: On schema violation, unsupported version,
            empty filter list or duplicated filter ids
    """
    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    if errors:
        details = "\n".join(f"  {i}. {_humanize_error(e)}" for i, e in enumerate(errors, 1))
        raise ConfigurationError(f"Settings file is not valid:\n{details}", hint=INIT_HINT)

    version = data[SettingsKey.VERSION]
    if version != SUPPORTED_SETTINGS_VERSION:
        raise ConfigurationError(
            f"Settings version is not supported: expected {SUPPORTED_SETTINGS_VERSION}, "
            f"found {version}",
            hint=INIT_HINT,
        )

    filters = data[SettingsKey.FILTERS]
    if not filters:
        raise ConfigurationError("Settings file does not contain any filter", hint=INIT_HINT)

    counts = Counter(item[SettingsKey.FILTER_ID] for item in filters)
    duplicates = [filter_id for filter_id, count in counts.items() if count > 1]
    if duplicates:
        raise ConfigurationError(
            "Filter ids must be unique, duplicated: '" + "', '".join(duplicates) + "'",
            hint=INIT_HINT,
        )

    return [FilterRuleSet.from_settings(item) for item in filters]


class SettingsStore:
    """Validated collection of filters, keyed by filter id."""

    def __init__(self, rule_sets: List[FilterRuleSet], path: Optional[Path] = None):
        self._rule_sets: Dict[str, FilterRuleSet] = {r.filter_id: r for r in rule_sets}
        self.path = path

    @classmethod
    def load(cls, path: Union[str, Path], schema_path: Union[str, Path]) -> "SettingsStore":
        """Load and validate a settings file.

        Raises:
            ConfigurationError: If the file is missing, not JSON or invalid
        """
        logger = get_logger()
        path = Path(path)
        if not path.is_file():
            raise ConfigurationError(
                f"Settings file can not be found: '{path}'", ErrorCode.NOT_FOUND, hint=INIT_HINT
            )

        logger.info(f"Start loading '{path}'")
        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Not a valid json file: '{path}': {e}", hint=INIT_HINT) from e
        except OSError as e:
            raise ConfigurationError(
                f"Settings file can not be read: '{path}': {e}", ErrorCode.INTERNAL_ERROR
            ) from e

        rule_sets = validate_settings(data, _load_schema(schema_path))
        logger.debug("Settings loaded", filters=len(rule_sets))
        return cls(rule_sets, path)

    @property
    def filter_ids(self) -> List[str]:
        return list(self._rule_sets)

    def select(self, filter_id: Optional[str] = None) -> FilterRuleSet:
        """Pick the filter for a run.

        Without an id, the only filter is used. Ids are case sensitive.

        Raises:
            UsageError: If no id is given and several filters exist, or the
                id is unknown
        """
        available = "Here is the list of filters available: '" + "', '".join(self.filter_ids) + "'"

        if filter_id is None:
            if len(self._rule_sets) == 1:
                return next(iter(self._rule_sets.values()))
            raise UsageError(
                "There are several filters available whereas no --filter-id option has been specified",
                hint=available,
            )

        rule_set = self._rule_sets.get(filter_id)
        if rule_set is None:
            raise UsageError(
                f"Filter named '{filter_id}' can not be found in: '{self.path}'",
                ErrorCode.NOT_FOUND,
                hint=f"{available}. As a reminder, the filter id is case sensitive.",
            )
        return rule_set

    def __iter__(self):
        return iter(self._rule_sets.values())
