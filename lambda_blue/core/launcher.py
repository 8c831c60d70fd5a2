"""Starts the selected emulator as a child process."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from loguru import logger

from lambda_blue.errors import LaunchError
from lambda_blue.models.emulator import Emulator
from lambda_blue.core.navigation import Launch, Outcome


class Launcher:
    """Runs emulator executables that live beside the launcher.

    An emulator called ``CHIP8`` is expected at ``<executable_dir>/CHIP8``
    (``CHIP8.exe`` on Windows).  The ROM path is its only argument.
    """

    def __init__(self, executable_dir: Path) -> None:
        self._dir = executable_dir

    def resolve_executable(self, emulator: Emulator) -> Path:
        path = self._dir / emulator.name
        if sys.platform == "win32" and not path.exists():
            exe = path.with_name(path.name + ".exe")
            if exe.exists():
                return exe
        return path

    def launch(self, emulator: Emulator) -> int:
        """Run *emulator* with its loaded ROM and wait for it to exit.

        Returns the child's exit status.

        Raises
        ------
        ValueError
            The emulator has no loaded ROM.
        LaunchError
            The process could not be started.
        """
        rom = emulator.loaded_rom
        if rom is None:
            raise ValueError(f"Emulator {emulator.name!r} has no loaded ROM")

        executable = self.resolve_executable(emulator)
        logger.info("Starting {} with {}", executable, rom.path)
        try:
            result = subprocess.run([str(executable), rom.path], check=False)  # noqa: S603
        except OSError as e:
            logger.error("Could not run {}: {}", executable, e)
            raise LaunchError(f"Could not run the {emulator.name} emulator: {e}") from e

        if result.returncode != 0:
            logger.warning("{} exited with status {}", emulator.name, result.returncode)
        else:
            logger.info("{} exited normally", emulator.name)
        return result.returncode

    def run(self, outcome: Outcome) -> int | None:
        """Execute a terminal menu outcome; ``Quit`` does nothing."""
        if isinstance(outcome, Launch):
            return self.launch(outcome.emulator)
        return None
