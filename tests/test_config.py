"""Tests for settings loading."""

import json

from lambda_blue.config import Config, MenuConfig


def test_defaults_without_settings_file(tmp_path):
    cfg = Config(data_dir=tmp_path)
    assert cfg.language == "en_US"
    assert cfg.theme == "auto"
    assert not cfg.debug
    assert cfg.window_size == (600, 600)
    assert cfg.registry_path == tmp_path / "emulators.json"
    assert cfg.log_dir == tmp_path / "logs"
    assert cfg.menu_config() == MenuConfig()


def test_config_is_singleton(tmp_path):
    assert Config(data_dir=tmp_path) is Config()


def test_settings_override_menu(tmp_path):
    (tmp_path / "settings.json").write_text(
        json.dumps({
            "debug": True,
            "known_emulators": ["CHIP8", "NES"],
            "labels": {"exit": "Quit"},
        }),
        encoding="utf-8",
    )
    cfg = Config(data_dir=tmp_path)
    menu = cfg.menu_config()
    assert cfg.debug
    assert menu.known_emulators == ("CHIP8", "NES")
    assert menu.exit_label == "Quit"
    assert menu.back_label == "Back"
    assert menu.load_rom_label == "Load Rom"


def test_corrupt_settings_fall_back_to_defaults(tmp_path):
    (tmp_path / "settings.json").write_text("[1, 2", encoding="utf-8")
    cfg = Config(data_dir=tmp_path)
    assert cfg.menu_config() == MenuConfig()


def test_settings_must_be_object(tmp_path):
    (tmp_path / "settings.json").write_text("[]", encoding="utf-8")
    assert Config(data_dir=tmp_path).language == "en_US"
