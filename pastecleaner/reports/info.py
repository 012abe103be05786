#!/usr/bin/env python3
"""Statistics about a copied base (get-info).

collect_info() counts entities per owner, locks per kind and code, and
entities per prefab; render_info() lays them out through a Jinja2
template with counts right-aligned per section.

Example:
    >>> report = collect_info(document)
    >>> print(render_info(report, templates_dir))
"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Union

import jinja2

from pastecleaner.core.constants import INFO_TEMPLATE_RESOURCE
from pastecleaner.document.model import EntityDocument
from pastecleaner.transforms.ownership import count_owners


@dataclass
class InfoReport:
    """Statistics of one document, each list already in display order."""

    owners: List[Tuple[int, int]] = field(default_factory=list)
    key_locks: int = 0
    code_locks: List[Tuple[str, int]] = field(default_factory=list)
    prefabs: List[Tuple[str, int]] = field(default_factory=list)


def collect_info(document: EntityDocument) -> InfoReport:
    """Count owners, locks and prefabs of a document.

    Owners and code locks are sorted descending by count (ties keep
    first-seen order), prefabs ascending by name.
    """
    entities = document.entities

    owners = sorted(count_owners(document).items(), key=lambda pair: pair[1], reverse=True)

    key_locks = sum(1 for e in entities if e.has_key_lock)
    code_counts = Counter(e.lock_code for e in entities if e.has_code_lock)
    code_locks = sorted(code_counts.items(), key=lambda pair: pair[1], reverse=True)

    prefab_counts = Counter(e.prefab or "" for e in entities)
    prefabs = sorted(prefab_counts.items())

    return InfoReport(owners, key_locks, code_locks, prefabs)


def _width(values) -> int:
    return max((len(str(v)) for v in values), default=1)


def create_environment(templates_dir: Union[str, Path]) -> jinja2.Environment:
    """Jinja2 environment loading report templates from a directory."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(templates_dir)),
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    env.filters["pad"] = lambda value, width: value.rjust(width)
    return env


def render_info(report: InfoReport, templates_dir: Union[str, Path]) -> str:
    """Render a report as text."""
    template = create_environment(templates_dir).get_template(INFO_TEMPLATE_RESOURCE)
    rendered = template.render(
        report=report,
        owner_width=_width(owner for owner, _ in report.owners),
        owner_count_width=_width(count for _, count in report.owners),
        lock_width=_width([report.key_locks] + [count for _, count in report.code_locks]),
        prefab_width=_width(count for _, count in report.prefabs),
    )
    return rendered.rstrip("\n")
