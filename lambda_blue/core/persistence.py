"""Registry persistence — reads and writes ``emulators.json``.

The file holds a JSON array of emulators::

    [
        {"name": "CHIP8", "roms": [{"name": "pong", "path": "/roms/pong.ch8"}]}
    ]

The per-session ``loaded_rom`` is never written.  A missing, empty or
corrupt file is not an error for the application: callers use
:meth:`RegistryStore.load_or_default`, which falls back to a registry
built from the known emulator names.
"""

from __future__ import annotations

import json
import os
import tempfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable

from loguru import logger

from lambda_blue.errors import (
    DuplicateEmulatorError,
    RegistryEmptyError,
    RegistryLoadError,
    RegistryParseError,
    RegistryReadError,
    RegistrySaveError,
)
from lambda_blue.models.emulator import Emulators


class RegistryStore:
    """Load and save an :class:`Emulators` registry at a fixed path."""

    def __init__(self, path: Path, pretty: bool = False) -> None:
        self._path = path
        self._pretty = pretty

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self) -> Emulators:
        """Read the registry from disk.

        Raises
        ------
        RegistryReadError
            The file is missing or cannot be read.
        RegistryEmptyError
            The file holds no data.
        RegistryParseError
            The file is not a valid registry.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise RegistryReadError(f"Could not read {self._path}: {e}") from e

        if not text.strip():
            raise RegistryEmptyError(f"{self._path} is empty")

        try:
            records = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as e:
            raise RegistryParseError(f"{self._path} is not valid JSON: {e}") from e

        if not isinstance(records, list):
            raise RegistryParseError(f"{self._path} does not hold a list of emulators")

        try:
            registry = Emulators.from_records(records)
        except (KeyError, TypeError, AttributeError, DuplicateEmulatorError) as e:
            raise RegistryParseError(f"{self._path} holds an invalid emulator: {e!r}") from e

        logger.debug("Loaded {} emulators from {}", len(registry), self._path)
        return registry

    def load_or_default(self, known_emulators: Iterable[str]) -> Emulators:
        """Load the registry, or build a fresh one from *known_emulators*."""
        try:
            return self.load()
        except RegistryReadError:
            logger.info("No saved emulators at {}, using defaults", self._path)
        except RegistryLoadError as e:
            logger.warning("Discarding saved emulators: {}", e)
        return Emulators.from_names(known_emulators)

    def save(self, registry: Emulators) -> None:
        """Write *registry* to disk and block until the write is done.

        The write happens on a worker thread and is joined here, so the
        caller always sees a completed save.  The file is replaced
        atomically; a reader never sees a partially written registry.
        """
        payload = json.dumps(
            registry.to_records(),
            indent=4 if self._pretty else None,
            ensure_ascii=False,
        )
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="registry-save") as pool:
            future = pool.submit(self._write, payload)
            try:
                future.result()
            except (OSError, UnicodeError) as e:
                logger.error("Failed to save emulators to {}: {}", self._path, e)
                raise RegistrySaveError(f"Could not save emulator configuration: {e}") from e

        registry.mark_clean()
        logger.info("Saved {} emulators to {}", len(registry), self._path)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _write(self, payload: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
