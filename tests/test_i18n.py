"""Tests for the translation tables."""

import pytest

from lambda_blue import i18n


@pytest.fixture(autouse=True)
def _english():
    yield
    i18n.init("en_US")


def test_lookup_and_placeholders():
    i18n.init("en_US")
    assert i18n.t("app.name") == "Lambda Blue"
    assert i18n.t("status.launching", name="CHIP8") == "Running CHIP8…"
    assert i18n.t("status.launch_failed", name="CHIP8") == "Could not start CHIP8"


def test_unknown_key_returns_key():
    i18n.init("en_US")
    assert i18n.t("no.such.key") == "no.such.key"
    assert i18n.t("app.name.deeper") == "app.name.deeper"


def test_unknown_language_falls_back_to_english():
    i18n.init("xx_XX")
    assert i18n.t("dialog.choose_rom") == "Choose a ROM file"


def test_chinese_catalog():
    i18n.init("zh_CN")
    assert i18n.t("dialog.choose_rom") == "选择 ROM 文件"
    assert i18n.t("status.launching", name="CHIP8") == "正在运行 CHIP8…"
