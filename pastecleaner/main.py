#!/usr/bin/env python3
"""Command runners for PasteCleaner.

This module handles:
- get-info: statistics about one document
- init-settings: writing the sample settings file
- list-filters: the filters of the settings file
- do-clean: the cleaning pipeline over a file or a directory
- do-space: the space projection of one document

Example:
    >>> from pastecleaner.main import run_command
    >>> run_command(args, app_config, logger)
"""

import argparse
from pathlib import Path
from typing import List, Optional

from pastecleaner.batch.orchestrator import (
    BatchOrchestrator,
    FileJob,
    FileOutcome,
    check_overwrite,
    commit_json,
    load_checked_document,
)
from pastecleaner.core.config import AppConfig
from pastecleaner.core.constants import ErrorCode
from pastecleaner.core.errors import InputError, UsageError
from pastecleaner.core.logging import Logger
from pastecleaner.core.validators import validate_filter_id, validate_lock_code, validate_owner_id
from pastecleaner.export.space import project_space, space_output_paths
from pastecleaner.reports.info import collect_info, render_info
from pastecleaner.settings.store import SettingsStore, write_sample_settings
from pastecleaner.transforms.base import TransformRequest
from pastecleaner.transforms.pipeline import TransformPipeline


class PasteCleanerMain:
    """Runs one command with an injected configuration."""

    def __init__(self, app_config: AppConfig, logger: Logger):
        """
        Initialize command runner.

        Args:
            app_config: Resolved configuration
            logger: Logger instance
        """
        self.config = app_config
        self.logger = logger

    def get_info(self, input_path: str) -> str:
        """Return the statistics report of one document."""
        path = Path(input_path).expanduser().resolve()
        if not path.is_file():
            raise InputError(f"Input file can not be found: '{path}'", ErrorCode.NOT_FOUND)

        document = load_checked_document(path)
        return render_info(collect_info(document), self.config.templates_dir)

    def init_settings(self, force: bool = False) -> Path:
        """Write the sample settings file."""
        return write_sample_settings(self.config.settings_file, force=force)

    def load_settings(self) -> SettingsStore:
        return SettingsStore.load(self.config.settings_file, self.config.schema_file)

    def list_filters(self) -> List[str]:
        """One line per filter with its pattern counts."""
        store = self.load_settings()
        return [
            f"{r.filter_id}: {len(r.remove_patterns)} removed, "
            f"{len(r.deactivate_patterns)} switched off, "
            f"{len(r.strip_contents_patterns)} emptied"
            for r in store
        ]

    def do_clean(
        self,
        input_path: str,
        output_path: str,
        overwrite: bool = False,
        filter_id: Optional[str] = None,
        owner_id: int = 0,
        lock_code: Optional[str] = None,
        lock_remove: bool = False,
        removed_items_from_prefabs: Optional[List[str]] = None,
    ) -> List[FileOutcome]:
        """Clean a file or every document of a directory.

        Arguments and settings are validated, and the batch planned,
        before any file is written.
        """
        request = TransformRequest(
            filter_id=validate_filter_id(filter_id),
            new_owner_id=validate_owner_id(owner_id),
            lock_code=validate_lock_code(lock_code),
            remove_all_locks=lock_remove,
            extra_strip_patterns=list(removed_items_from_prefabs or []),
        )

        rule_set = self.load_settings().select(request.filter_id)
        self.logger.info(f"Using filter '{rule_set.filter_id}'")

        orchestrator = BatchOrchestrator(overwrite=overwrite, indent=self.config.indent)
        jobs = orchestrator.plan(input_path, output_path)

        def clean(document):
            return TransformPipeline.for_rule_set(rule_set, request).apply(document, request)

        return orchestrator.run(jobs, clean)

    def do_space(self, input_path: str, output_dir: str, overwrite: bool = False) -> List[Path]:
        """Write the space and residual documents of one document."""
        path = Path(input_path).expanduser().resolve()
        out_dir = Path(output_dir).expanduser().resolve()
        if not path.is_file():
            raise InputError(f"Input file can not be found: '{path}'", ErrorCode.NOT_FOUND)
        if not out_dir.is_dir():
            raise UsageError(f"Output directory does not exist: '{out_dir}'")

        space_path, others_path = space_output_paths(path, out_dir)
        check_overwrite([FileJob(path, space_path), FileJob(path, others_path)], overwrite)

        document = load_checked_document(path)
        space, others = project_space(document)

        written = []
        for data, target in ((space, space_path), (others, others_path)):
            self.logger.info(f"Start writing '{target}'")
            written.append(commit_json(data, target, self.config.indent))
        return written


def run_command(args: argparse.Namespace, app_config: AppConfig, logger: Logger) -> int:
    """
    Dispatch a parsed command.

    Returns:
        Exit code (0 on success)

    Raises:
        CleanerError: On any failure
    """
    runner = PasteCleanerMain(app_config, logger)

    if args.command == "get-info":
        print(runner.get_info(args.input))
    elif args.command == "init-settings":
        path = runner.init_settings(force=args.force)
        logger.info(f"Settings file written: '{path}'")
    elif args.command == "list-filters":
        for line in runner.list_filters():
            print(line)
    elif args.command == "do-clean":
        outcomes = runner.do_clean(
            args.input,
            args.output,
            overwrite=args.overwrite,
            filter_id=args.filter_id,
            owner_id=args.owner_id,
            lock_code=args.lock_code,
            lock_remove=args.lock_remove,
            removed_items_from_prefabs=args.removed_items_from_prefabs,
        )
        logger.info(f"{len(outcomes)} file(s) cleaned")
    elif args.command == "do-space":
        runner.do_space(args.input, args.output, overwrite=args.overwrite)
    else:
        raise UsageError(f"Unknown command: {args.command}")

    return 0
