#!/usr/bin/env python3
"""Transform pipeline for cleaning a document.

Steps run in a fixed order: remove prefabs, switch off prefabs, remove
items, ownership, lock code, lock removal. The first failing step
raises, so a half-cleaned document is never committed.

Example:
    >>> pipeline = TransformPipeline.for_rule_set(rule_set)
    >>> report = pipeline.apply(document, TransformRequest(lock_code="1234"))
    >>> report.changed("lock-code")
"""

from dataclasses import dataclass, field
from typing import List, Optional

from pastecleaner.core.logging import FAILED, get_logger
from pastecleaner.document.model import EntityDocument
from pastecleaner.rules.filters import FilterRuleSet
from pastecleaner.transforms.base import (
    Transform,
    TransformError,
    TransformRequest,
    TransformResult,
)
from pastecleaner.transforms.filtering import (
    NO_PATTERNS,
    RemoveItemsTransform,
    RemovePrefabsTransform,
    SwitchOffPrefabsTransform,
)
from pastecleaner.transforms.locks import LockCodeTransform, LockRemovalTransform
from pastecleaner.transforms.ownership import OwnershipTransform


@dataclass
class PipelineReport:
    """Results of one pipeline run, in step order."""

    results: List[TransformResult] = field(default_factory=list)

    def get(self, name: str) -> Optional[TransformResult]:
        for result in self.results:
            if result.transform_name == name:
                return result
        return None

    def changed(self, name: str) -> int:
        result = self.get(name)
        return result.changed if result else 0


class TransformPipeline:
    """Sequential chain of document transforms."""

    def __init__(self):
        self._transforms: List[Transform] = []
        self._logger = get_logger()

    @classmethod
    def for_rule_set(
        cls, rule_set: FilterRuleSet, request: Optional[TransformRequest] = None
    ) -> "TransformPipeline":
        """Build the standard cleaning pipeline for a rule set.

        Args:
            rule_set: Filter to apply
            request: Run parameters; its extra item-stripping patterns are
                merged into the rule set
        """
        if request is not None and request.extra_strip_patterns:
            rule_set = rule_set.with_extra_strip_patterns(request.extra_strip_patterns)

        pipeline = cls()
        pipeline.add_transform(RemovePrefabsTransform(rule_set.remove_patterns))
        pipeline.add_transform(SwitchOffPrefabsTransform(rule_set.deactivate_patterns))
        pipeline.add_transform(RemoveItemsTransform(rule_set.strip_contents_patterns))
        pipeline.add_transform(OwnershipTransform())
        pipeline.add_transform(LockCodeTransform())
        pipeline.add_transform(LockRemovalTransform())
        return pipeline

    def add_transform(self, transform: Transform) -> None:
        """Add transform to pipeline (executed in insertion order)."""
        self._transforms.append(transform)

    def apply(self, document: EntityDocument, request: TransformRequest) -> PipelineReport:
        """Apply all transforms to the document in place.

        Returns:
            Report of every step

        Raises:
            TransformError: From the first failing step
        """
        report = PipelineReport()

        for transform in self._transforms:
            result = transform.apply(document, request)
            report.results.append(result)

            if result.skipped:
                if result.reason != NO_PATTERNS:
                    self._logger.progress(transform.description, "skipped", reason=result.reason)
            elif not result.success:
                self._logger.progress(transform.description, FAILED, error=result.error)
                raise TransformError(result.error, transform.name)
            else:
                self._logger.progress(
                    transform.description, "done", changed=result.changed, **result.metadata
                )

        return report

    def __repr__(self) -> str:
        return f"<TransformPipeline steps={[t.name for t in self._transforms]}>"
