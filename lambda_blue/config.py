"""Application configuration management."""

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from loguru import logger

REGISTRY_FILE_NAME = "emulators.json"
SETTINGS_FILE_NAME = "settings.json"


def executable_dir() -> Path:
    """Return the directory holding the launcher's own executable.

    For a frozen build that is the directory of the binary; when running
    from source it is the directory of the started script.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(sys.argv[0] or ".").resolve().parent


@dataclass(frozen=True)
class MenuConfig:
    """Fixed tables the navigation engine works with."""

    known_emulators: tuple[str, ...] = ("CHIP8",)
    """Emulators offered when no registry has been saved yet."""

    exit_label: str = "Exit"
    load_rom_label: str = "Load Rom"
    back_label: str = "Back"


_DEFAULT_CONFIG: dict[str, Any] = {
    "language": "en_US",
    "theme": "auto",
    "debug": False,
    "known_emulators": list(MenuConfig.known_emulators),
    "labels": {},
    "window_width": 600,
    "window_height": 600,
    "font_size": 28,
}


class Config:
    """Singleton application configuration.

    Settings are read once from ``settings.json`` beside the executable.
    The file is optional and never written by the launcher itself.
    """

    _instance: Optional["Config"] = None
    _data: dict[str, Any]
    _path: Path
    _data_dir: Path

    def __new__(cls, config_path: Optional[Path] = None, data_dir: Optional[Path] = None) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None, data_dir: Optional[Path] = None) -> None:
        if self._initialized:  # type: ignore[has-type]
            return
        self._initialized = True
        self._data_dir = data_dir or executable_dir()
        self._path = config_path or (self._data_dir / SETTINGS_FILE_NAME)
        self._data = dict(_DEFAULT_CONFIG)
        self._load()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def registry_path(self) -> Path:
        return self._data_dir / REGISTRY_FILE_NAME

    @property
    def log_dir(self) -> Path:
        return self._data_dir / "logs"

    @property
    def language(self) -> str:
        return self._data.get("language", "en_US")

    @property
    def theme(self) -> str:
        return self._data.get("theme", "auto")

    @property
    def debug(self) -> bool:
        return bool(self._data.get("debug", False))

    @property
    def window_size(self) -> tuple[int, int]:
        return int(self._data.get("window_width", 600)), int(self._data.get("window_height", 600))

    @property
    def font_size(self) -> int:
        return int(self._data.get("font_size", 28))

    def menu_config(self) -> MenuConfig:
        """Build the navigation tables from the current settings."""
        labels = self._data.get("labels") or {}
        known = self._data.get("known_emulators") or list(MenuConfig.known_emulators)
        return MenuConfig(
            known_emulators=tuple(str(n) for n in known),
            exit_label=labels.get("exit", MenuConfig.exit_label),
            load_rom_label=labels.get("load_rom", MenuConfig.load_rom_label),
            back_label=labels.get("back", MenuConfig.back_label),
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                saved = json.load(f)
            if not isinstance(saved, dict):
                raise ValueError("settings must be a JSON object")
            self._data.update(saved)
            logger.info("Configuration loaded from {}", self._path)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load config, using defaults: {}", e)

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (for testing)."""
        cls._instance = None
