"""Shared fixtures for the launcher tests."""

import os
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from lambda_blue.config import Config, MenuConfig  # noqa: E402
from lambda_blue.core.persistence import RegistryStore  # noqa: E402
from tests.helpers import RecordingStore  # noqa: E402


@pytest.fixture
def menu() -> MenuConfig:
    return MenuConfig(known_emulators=("CHIP8",))


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def registry_path(tmp_path: Path) -> Path:
    return tmp_path / "emulators.json"


@pytest.fixture
def disk_store(registry_path: Path) -> RegistryStore:
    return RegistryStore(registry_path)


@pytest.fixture(autouse=True)
def _reset_config():
    Config.reset()
    yield
    Config.reset()
