"""PasteCleaner Batch: input/output mapping and per-file atomic commit."""

from .orchestrator import (
    BatchOrchestrator,
    FileJob,
    FileOutcome,
    OutputExistsError,
    check_overwrite,
    commit_json,
    load_checked_document,
    resolve_jobs,
)

__all__ = [
    "BatchOrchestrator",
    "FileJob",
    "FileOutcome",
    "OutputExistsError",
    "check_overwrite",
    "commit_json",
    "load_checked_document",
    "resolve_jobs",
]
