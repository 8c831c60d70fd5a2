"""Internationalization module.

Every ``<lang>.json`` file beside this module is a catalog of nested
keys, looked up with :func:`t` as ``"section.key"``.
"""

import json
from pathlib import Path
from typing import Any, Optional

DEFAULT_LANGUAGE = "en_US"

_current_lang = DEFAULT_LANGUAGE
_translations: dict[str, dict[str, Any]] = {}
_i18n_dir = Path(__file__).parent


def _load_catalog(lang_file: Path) -> None:
    with open(lang_file, "r", encoding="utf-8") as f:
        _translations[lang_file.stem] = json.load(f)


def t(key: str, **kwargs: Any) -> str:
    """Get a translated string by dot-separated key.

    Unknown keys come back unchanged.  Placeholders are filled from
    keyword arguments: t("status.launching", name="CHIP8") -> "Running CHIP8…"
    """
    data: Any = _translations.get(_current_lang, {})
    for k in key.split("."):
        data = data.get(k) if isinstance(data, dict) else None
    if data is None:
        return key
    result = str(data)
    for k, v in kwargs.items():
        result = result.replace(f"{{{k}}}", str(v))
    return result


def init(lang: Optional[str] = None) -> None:
    """Load every catalog and activate *lang*, or English when it has none."""
    global _current_lang
    for f in _i18n_dir.glob("*.json"):
        _load_catalog(f)
    _current_lang = lang if lang in _translations else DEFAULT_LANGUAGE
