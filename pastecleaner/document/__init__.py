"""PasteCleaner Document model.

- EntityDocument / Entity: parsed copied base with typed accessors
- check_version: major version gate
"""

from .model import Entity, EntityDocument, dump_document, load_document, parse_document
from .version import check_version

__all__ = [
    "Entity",
    "EntityDocument",
    "check_version",
    "dump_document",
    "load_document",
    "parse_document",
]
