"""PasteCleaner Settings: persisted filter collection."""

from .store import SettingsStore, sample_settings, validate_settings, write_sample_settings

__all__ = [
    "SettingsStore",
    "sample_settings",
    "validate_settings",
    "write_sample_settings",
]
