"""Shared pytest fixtures for PasteCleaner tests."""
import copy
import json
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator

import pytest

from pastecleaner.core.config import ConfigManager
from pastecleaner.core.logging import Logger, install_logger
from pastecleaner.document.model import EntityDocument
from pastecleaner.settings.store import sample_settings

FOUNDATION = "assets/prefabs/building core/foundation/foundation.prefab"
METAL_DOOR = "assets/prefabs/building/door.hinged/door.hinged.metal.prefab"
WOOD_DOOR = "assets/prefabs/building/door.hinged/door.hinged.wood.prefab"
BED = "assets/prefabs/deployable/bed/bed_deployed.prefab"
BOOMBOX = "assets/prefabs/voiceaudio/boombox/boombox.deployed.prefab"
WOODBOX = "assets/prefabs/deployable/woodenbox/woodbox_deployed.prefab"
TURRET = "assets/prefabs/npc/autoturret/autoturret_deployed.prefab"

SAMPLE_DOCUMENT: Dict[str, Any] = {
    "default": {"position": {"x": 0.0, "y": 0.0, "z": 0.0}, "rotationdiff": 0.0},
    "entities": [
        {"prefabname": FOUNDATION, "ownerid": 111, "pos": {"x": 1, "y": 0, "z": 1}},
        {"prefabname": FOUNDATION, "ownerid": 111, "pos": {"x": 4, "y": 0, "z": 1}},
        {
            "prefabname": METAL_DOOR,
            "ownerid": 222,
            "lock": {"prefabname": "assets/prefabs/locks/keypad/lock.code.prefab", "code": "1111"},
        },
        {
            "prefabname": WOOD_DOOR,
            "ownerid": 0,
            "lock": {"prefabname": "assets/prefabs/locks/keylock/lock.key.prefab"},
        },
        {"prefabname": BED, "ownerid": 111},
        {"prefabname": BOOMBOX, "ownerid": 0, "flags": {"On": True, "Reserved8": True}},
        {"prefabname": WOODBOX, "ownerid": 111, "items": [{"id": 1}, {"id": 2}]},
        {
            "prefabname": TURRET,
            "pos": {"x": 10, "y": 2.5, "z": -3},
            "rot": {"x": 0, "y": 90, "z": 0},
            "skinid": 0,
        },
    ],
    "protocol": {"items": 2, "version": {"Major": 4, "Minor": 1, "Patch": 2}},
}


@pytest.fixture(autouse=True)
def quiet_logger() -> Generator[Logger, None, None]:
    """Install a global logger without console output."""
    logger = Logger(level="DEBUG", console=False)
    install_logger(logger)
    yield logger
    install_logger(None)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_data() -> Dict[str, Any]:
    """A fresh copy of the sample copied base."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def document(sample_data: Dict[str, Any]) -> EntityDocument:
    """The sample copied base as an EntityDocument."""
    return EntityDocument(sample_data)


@pytest.fixture
def document_file(temp_dir: Path, sample_data: Dict[str, Any]) -> Path:
    """The sample copied base written to disk."""
    path = temp_dir / "base.json"
    path.write_text(json.dumps(sample_data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def settings_file(temp_dir: Path) -> Path:
    """The sample settings written to disk."""
    path = temp_dir / "pastecleaner.json"
    path.write_text(json.dumps(sample_settings(), indent=2), encoding="utf-8")
    return path


@pytest.fixture
def app_config(settings_file: Path):
    """AppConfig pointing at the test settings file."""
    manager = ConfigManager(environ={})
    manager.set("settings_file", str(settings_file))
    return manager.to_app_config()
