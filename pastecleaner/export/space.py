#!/usr/bin/env python3
"""Projection of a copied base into a space layout (do-space).

Turrets, crates and doors are extracted into a structured space
document; every other entity goes to a residual document with its prefab
name, placement and skin. Coordinates are written as ``"x y z"`` strings
with three decimals.

Example:
    >>> space, others = project_space(document)
    >>> space["turrets"][0]["position"]
    '10.000 2.500 -3.000'
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pastecleaner.core.constants import SPACE_DOCUMENT_VERSION
from pastecleaner.document.model import Entity, EntityDocument, Vector
from pastecleaner.rules.patterns import PrefabMatcher

TURRET_PATTERNS = [
    "assets/prefabs/npc/autoturret/*",
    "assets/prefabs/npc/flame turret/*",
    "assets/prefabs/npc/sam_site_turret/*",
    "assets/prefabs/deployable/single shot trap/*",
]

CRATE_PATTERNS = [
    "assets/bundled/prefabs/radtown/*",
    "assets/prefabs/deployable/woodenbox/*",
    "assets/prefabs/deployable/large wood storage/*",
]

DOOR_PATTERNS = [
    "assets/prefabs/building/door.hinged/*",
    "assets/prefabs/building/door.double.hinged/*",
    "assets/prefabs/building/wall.frame.garagedoor/*",
    "assets/prefabs/building/gates.external.high/*",
]

SPACE_SUFFIX = ".space.json"
OTHERS_SUFFIX = ".others.json"


def format_vector(vector: Vector) -> str:
    """Render a vector as ``"x y z"`` with three decimals."""
    return " ".join(f"{axis:.3f}" for axis in vector)


@dataclass
class SpaceCategory:
    """Named group of prefabs projected into the space document."""

    name: str
    matcher: PrefabMatcher
    requires_lock: Optional[bool] = None

    def accepts(self, entity: Entity) -> bool:
        if not self.matcher.matches(entity.prefab):
            return False
        if self.requires_lock is None:
            return True
        return entity.has_lock == self.requires_lock


CATEGORIES = [
    SpaceCategory("turrets", PrefabMatcher(TURRET_PATTERNS)),
    SpaceCategory("crates", PrefabMatcher(CRATE_PATTERNS)),
    SpaceCategory("access_doors", PrefabMatcher(DOOR_PATTERNS), requires_lock=True),
    SpaceCategory("doors", PrefabMatcher(DOOR_PATTERNS), requires_lock=False),
]


def _placement(entity: Entity) -> Dict[str, Any]:
    return {
        "position": format_vector(entity.position),
        "rotation": format_vector(entity.rotation),
    }


def project_space(
    document: EntityDocument, source: Optional[str] = None
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Split a document into a space document and a residual document.

    Categories are tried in order; the first accepting category wins.

    Returns:
        (space document, residual document)
    """
    if source is None and document.source is not None:
        source = document.source.name

    space: Dict[str, Any] = {"version": SPACE_DOCUMENT_VERSION, "source": source}
    for category in CATEGORIES:
        space[category.name] = []
    others: List[Dict[str, Any]] = []

    for entity in document.entities:
        category = next((c for c in CATEGORIES if c.accepts(entity)), None)
        if category is None:
            record = {"id": entity.prefab, **_placement(entity)}
            if entity.skin_id:
                record["skin"] = entity.skin_id
            others.append(record)
            continue

        record = {"prefab": entity.prefab, **_placement(entity)}
        if category.name == "access_doors" and entity.has_code_lock:
            record["code"] = entity.lock_code
        space[category.name].append(record)

    residual = {"version": SPACE_DOCUMENT_VERSION, "source": source, "entities": others}
    return space, residual


def space_output_paths(input_path: Path, output_dir: Path) -> Tuple[Path, Path]:
    """Paths of the space and residual documents for an input file."""
    stem = input_path.stem
    return output_dir / f"{stem}{SPACE_SUFFIX}", output_dir / f"{stem}{OTHERS_SUFFIX}"
