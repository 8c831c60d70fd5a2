"""Tests for starting emulator processes."""

import stat
import sys
from pathlib import Path

import pytest

from lambda_blue.core.launcher import Launcher
from lambda_blue.core.navigation import Launch, Quit
from lambda_blue.errors import LaunchError
from lambda_blue.models import Emulator, Rom

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses a shebang script")


def _fake_emulator(directory: Path, name: str, exit_code: int = 0) -> Path:
    """Write an executable that records its arguments next to itself."""
    script = directory / name
    script.write_text(
        f"#!{sys.executable}\n"
        "import sys, pathlib\n"
        "pathlib.Path(sys.argv[0] + '.args').write_text('\\n'.join(sys.argv[1:]))\n"
        f"sys.exit({exit_code})\n",
        encoding="utf-8",
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


def _loaded(name: str, rom_path: str) -> Emulator:
    emulator = Emulator(name)
    emulator.load_rom(Rom.from_path(rom_path))
    return emulator


def test_resolve_executable_beside_launcher(tmp_path):
    launcher = Launcher(tmp_path)
    assert launcher.resolve_executable(Emulator("CHIP8")) == tmp_path / "CHIP8"


@posix_only
def test_launch_passes_rom_path_as_only_argument(tmp_path):
    script = _fake_emulator(tmp_path, "CHIP8")
    code = Launcher(tmp_path).launch(_loaded("CHIP8", "/home/user/my pong.ch8"))
    assert code == 0
    assert Path(str(script) + ".args").read_text() == "/home/user/my pong.ch8"


@posix_only
def test_launch_returns_child_exit_status(tmp_path):
    _fake_emulator(tmp_path, "CHIP8", exit_code=3)
    assert Launcher(tmp_path).launch(_loaded("CHIP8", "/roms/pong.ch8")) == 3


@posix_only
def test_run_launch_outcome(tmp_path):
    _fake_emulator(tmp_path, "CHIP8")
    assert Launcher(tmp_path).run(Launch(_loaded("CHIP8", "/roms/pong.ch8"))) == 0


def test_run_quit_does_nothing(tmp_path):
    assert Launcher(tmp_path).run(Quit()) is None


def test_missing_executable_is_launch_error(tmp_path):
    with pytest.raises(LaunchError):
        Launcher(tmp_path).launch(_loaded("CHIP8", "/roms/pong.ch8"))


def test_launch_without_rom_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        Launcher(tmp_path).launch(Emulator("CHIP8"))
