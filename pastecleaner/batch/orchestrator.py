#!/usr/bin/env python3
"""Batch processing of copied base files.

Turns an input/output path pair into an explicit list of
(input file, output file) jobs, enforces the overwrite policy for the
whole batch up front, then processes files one at a time in ascending
input order. Each file is loaded, version-gated, transformed and
committed atomically; the first failure stops the batch, files already
committed stay committed.

Example:
    >>> orchestrator = BatchOrchestrator(overwrite=False)
    >>> jobs = orchestrator.plan("bases/", "cleaned/")
    >>> orchestrator.run(jobs, lambda document: pipeline.apply(document, request))
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from pastecleaner.core.constants import ErrorCode
from pastecleaner.core.errors import InputError, UsageError
from pastecleaner.core.file_ops import list_json_files, write_atomic
from pastecleaner.core.logging import get_logger
from pastecleaner.document.model import EntityDocument, dump_document, load_document
from pastecleaner.document.version import check_version

PathLike = Union[str, Path]


@dataclass(frozen=True)
class FileJob:
    """One input file and the output it is written to."""

    input_path: Path
    output_path: Path


@dataclass
class FileOutcome:
    """What processing one file produced."""

    job: FileJob
    result: Any = None


class OutputExistsError(UsageError):
    """Outputs are taken: by a directory, or by a file without overwrite."""

    def __init__(self, paths: List[Path]):
        lines = "\n".join(
            f"Output path is an existing directory: '{p}'" if p.is_dir() else f"Output file already exists: '{p}'"
            for p in paths
        )
        if any(p.is_dir() for p in paths):
            hint = "Move the directories away or choose another output"
        else:
            hint = "Use --overwrite to replace them"
        super().__init__(lines, ErrorCode.CONFLICT, hint=hint)
        self.paths = paths


def resolve_jobs(input_path: PathLike, output_path: PathLike) -> List[FileJob]:
    """Map an input path and an output path onto file jobs.

    - file -> file: one job as given
    - file -> existing directory: output named after the input file
    - directory -> existing directory: one job per *.json file directly
      inside the input directory

    Raises:
        InputError: If the input does not exist
        UsageError: If the input is a directory and the output is not an
            existing directory
    """
    input_path = Path(input_path).expanduser().resolve()
    output_path = Path(output_path).expanduser().resolve()

    input_is_file = input_path.is_file()
    if not input_is_file and not input_path.is_dir():
        raise InputError(f"Input can not be found: '{input_path}'", ErrorCode.NOT_FOUND)

    output_is_dir = output_path.is_dir()

    if input_is_file and not output_is_dir:
        jobs = [FileJob(input_path, output_path)]
    elif input_is_file:
        jobs = [FileJob(input_path, output_path / input_path.name)]
    elif not output_is_dir:
        raise UsageError(
            "Input is a directory whereas output is an existing file "
            "or a directory that does not exist",
            hint="Create the output directory first",
        )
    else:
        jobs = [FileJob(p, output_path / p.name) for p in list_json_files(input_path)]

    return sorted(jobs, key=lambda job: str(job.input_path))


def check_overwrite(jobs: List[FileJob], overwrite: bool) -> None:
    """Refuse the batch if any output is already taken.

    A directory at an output path is refused even with overwrite.

    Raises:
        OutputExistsError: Naming every taken output
    """
    taken = [
        job.output_path
        for job in jobs
        if job.output_path.is_dir() or (not overwrite and job.output_path.is_file())
    ]
    if taken:
        raise OutputExistsError(taken)


def commit_json(data: Any, path: PathLike, indent: int = 2, temp_dir: Optional[PathLike] = None) -> Path:
    """Serialize JSON data to a path through the atomic commit."""

    def writer(stream):
        json.dump(data, stream, indent=indent, ensure_ascii=False)
        stream.write("\n")

    return write_atomic(path, writer, temp_dir)


def load_checked_document(path: PathLike) -> EntityDocument:
    """Load a document and check its major version.

    Raises:
        InputError: If the file is missing, invalid or of another version
    """
    logger = get_logger()
    logger.info(f"Start loading '{path}'")
    document = load_document(path)
    check_version(document)
    logger.debug("Document loaded", entities=len(document))
    return document


class BatchOrchestrator:
    """Drives a document transformation over a batch of files."""

    def __init__(self, overwrite: bool = False, indent: int = 2, temp_dir: Optional[PathLike] = None):
        """Initialize orchestrator.

        Args:
            overwrite: Allow replacing existing output files
            indent: JSON indentation of written documents
            temp_dir: Directory for temporary files (default: platform temp)
        """
        self.overwrite = overwrite
        self.indent = indent
        self.temp_dir = temp_dir
        self._logger = get_logger()

    def plan(self, input_path: PathLike, output_path: PathLike) -> List[FileJob]:
        """Resolve jobs and enforce the overwrite policy for the batch."""
        jobs = resolve_jobs(input_path, output_path)
        if not jobs:
            self._logger.warning(f"No document found in '{input_path}'")
        check_overwrite(jobs, self.overwrite)
        return jobs

    def run(
        self, jobs: List[FileJob], transform: Callable[[EntityDocument], Any]
    ) -> List[FileOutcome]:
        """Process every job in order, stopping at the first failure.

        Raises:
            CleanerError: From the first failing file
        """
        outcomes = []
        for job in jobs:
            with self._logger.for_file(job.input_path):
                outcomes.append(self.process_file(job, transform))
        return outcomes

    def process_file(self, job: FileJob, transform: Callable[[EntityDocument], Any]) -> FileOutcome:
        """Load, gate, transform and commit one file."""
        check_overwrite([job], self.overwrite)

        document = load_checked_document(job.input_path)
        result = transform(document)

        self._logger.info(f"Start writing '{job.output_path}'")
        write_atomic(
            job.output_path,
            lambda stream: dump_document(document, stream, self.indent),
            self.temp_dir,
        )
        self._logger.info(f"Processed '{job.input_path}' into '{job.output_path}'")
        return FileOutcome(job, result)
