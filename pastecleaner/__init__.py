"""PasteCleaner - cleaning of copied base snapshots.

Loads copy/paste base documents, applies named filters (remove,
switch-off and item stripping rules), rewrites ownership and locks,
and commits the result atomically.
"""

from pastecleaner.core.constants import PASTECLEANER_VERSION

__version__ = PASTECLEANER_VERSION
