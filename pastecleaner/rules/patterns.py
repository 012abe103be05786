#!/usr/bin/env python3
"""Prefab pattern matching.

A pattern either equals a prefab name exactly, or ends with ``/*`` and
matches every prefab name starting with the pattern minus its trailing
``*``. Matching is case-sensitive and patterns have no precedence: a
prefab matches a pattern list when any pattern matches it.

Example:
    >>> matches("assets/prefabs/deployable/bed/bed.deployed.prefab",
    ...         ["assets/prefabs/deployable/bed/*"])
    True
    >>> matcher = PrefabMatcher(["assets/prefabs/deployable/bed/*"])
    >>> matcher.matches("assets/prefabs/deployable/chair/chair.deployed.prefab")
    False
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

WILDCARD_SUFFIX = "/*"


class PatternType(Enum):
    """Pattern matching type."""

    EXACT = "exact"  # Whole prefab name
    PREFIX = "prefix"  # Directory prefix ending with /*


@dataclass(frozen=True)
class PatternEntry:
    """A single compiled pattern."""

    pattern: str
    pattern_type: PatternType
    compiled: str

    @classmethod
    def compile(cls, pattern: str) -> "PatternEntry":
        if pattern.endswith(WILDCARD_SUFFIX):
            return cls(pattern, PatternType.PREFIX, pattern[:-1])
        return cls(pattern, PatternType.EXACT, pattern)

    def matches(self, prefab: str) -> bool:
        if self.pattern_type == PatternType.PREFIX:
            return prefab.startswith(self.compiled)
        return prefab == self.compiled


def pattern_matches(prefab: str, pattern: str) -> bool:
    """Check a prefab name against one pattern."""
    return (pattern.endswith(WILDCARD_SUFFIX) and prefab.startswith(pattern[:-1])) or (
        prefab == pattern
    )


def matches(prefab: Optional[str], patterns: Iterable[str]) -> bool:
    """Check if a prefab name matches any pattern.

    Args:
        prefab: Prefab name (None or empty never matches)
        patterns: Patterns to test

    Returns:
        True if at least one pattern matches
    """
    if not prefab or not isinstance(prefab, str):
        return False
    return any(pattern_matches(prefab, pattern) for pattern in patterns)


class PrefabMatcher:
    """Compiled pattern list with OR logic."""

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        """Initialize prefab matcher.

        Args:
            patterns: Initial patterns
        """
        self._patterns: List[PatternEntry] = []
        for pattern in patterns or ():
            self.add_pattern(pattern)

    def add_pattern(self, pattern: str) -> None:
        """Add a pattern.

        Raises:
            ValueError: If pattern is empty or not a string
        """
        if not isinstance(pattern, str) or not pattern:
            raise ValueError(f"Invalid prefab pattern: {pattern!r}")
        self._patterns.append(PatternEntry.compile(pattern))

    def matches(self, prefab: Optional[str]) -> bool:
        """Check if prefab matches any pattern."""
        if not self._patterns:
            return False
        if not prefab or not isinstance(prefab, str):
            return False

        for entry in self._patterns:
            if entry.matches(prefab):
                return True
        return False

    def __bool__(self) -> bool:
        """Return True if any patterns are registered."""
        return bool(self._patterns)
