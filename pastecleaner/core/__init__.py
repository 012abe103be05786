"""PasteCleaner Core - shared utilities.

Import specific functions from submodules:
    from pastecleaner.core.config import ConfigManager
    from pastecleaner.core import constants
    from pastecleaner.core import errors
    from pastecleaner.core import file_ops
    from pastecleaner.core import logging
    from pastecleaner.core import validators
"""

from pastecleaner.core import config, constants, errors, file_ops, logging, validators

__all__ = [
    "config",
    "constants",
    "errors",
    "file_ops",
    "logging",
    "validators",
]
