"""PasteCleaner Rules.

This module provides prefab pattern matching and filter rule sets:
- PrefabMatcher / matches: exact or trailing-wildcard prefab matching
- FilterRuleSet: named remove / switch-off / strip-items pattern lists
"""

from .filters import FilterRuleSet
from .patterns import PatternEntry, PatternType, PrefabMatcher, matches, pattern_matches

__all__ = [
    # Pattern matching
    "PatternType",
    "PatternEntry",
    "PrefabMatcher",
    "matches",
    "pattern_matches",
    # Filters
    "FilterRuleSet",
]
