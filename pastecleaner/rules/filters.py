#!/usr/bin/env python3
"""Filter rule sets.

A filter is a named group of three pattern lists: prefabs to remove,
prefabs to switch off and prefabs whose items are removed.

Example:
    >>> rule_set = FilterRuleSet.from_settings({
    ...     "filter-id": "default-clean",
    ...     "removed-prefabs": ["assets/prefabs/deployable/bed/*"],
    ...     "switchedoff-prefabs": [],
    ...     "removed-items-from-prefabs": [],
    ... })
    >>> rule_set.remove_patterns
    ['assets/prefabs/deployable/bed/*']
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List

from pastecleaner.core.constants import SettingsKey


@dataclass(frozen=True)
class FilterRuleSet:
    """Named, ordered collection of mutation rules."""

    filter_id: str
    remove_patterns: List[str] = field(default_factory=list)
    deactivate_patterns: List[str] = field(default_factory=list)
    strip_contents_patterns: List[str] = field(default_factory=list)

    def with_extra_strip_patterns(self, patterns: Iterable[str]) -> "FilterRuleSet":
        """Copy of this rule set with additional item-stripping patterns."""
        extra = [p for p in patterns if p not in self.strip_contents_patterns]
        if not extra:
            return self
        return replace(self, strip_contents_patterns=self.strip_contents_patterns + extra)

    @classmethod
    def from_settings(cls, data: Dict[str, Any]) -> "FilterRuleSet":
        """Build a rule set from its settings representation."""
        return cls(
            filter_id=data[SettingsKey.FILTER_ID],
            remove_patterns=list(data.get(SettingsKey.REMOVED_PREFABS, [])),
            deactivate_patterns=list(data.get(SettingsKey.SWITCHED_OFF_PREFABS, [])),
            strip_contents_patterns=list(data.get(SettingsKey.REMOVED_ITEMS_FROM_PREFABS, [])),
        )

    def to_settings(self) -> Dict[str, Any]:
        """Settings representation of this rule set."""
        return {
            SettingsKey.FILTER_ID: self.filter_id,
            SettingsKey.REMOVED_PREFABS: list(self.remove_patterns),
            SettingsKey.SWITCHED_OFF_PREFABS: list(self.deactivate_patterns),
            SettingsKey.REMOVED_ITEMS_FROM_PREFABS: list(self.strip_contents_patterns),
        }
