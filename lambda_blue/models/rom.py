"""Data model for ROM files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any


@dataclass(frozen=True)
class Rom:
    """A ROM file that can be handed to an emulator.

    Equality and hashing only look at :attr:`path`; two entries that point
    at the same file are the same ROM whatever their labels say.
    """

    name: str = field(compare=False)
    """Menu label, the file's base name without extension."""

    path: str
    """Absolute location of the ROM file."""

    @classmethod
    def from_path(cls, path: str) -> Rom:
        """Build a ROM from a file path chosen by the user."""
        return cls(name=PurePath(path).stem or path, path=path)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Rom:
        """Rebuild a ROM from its serialized form.

        Older registry files stored the full path under ``name`` and had
        no ``path`` key at all.
        """
        path = record.get("path")
        if path is None:
            return cls.from_path(str(record["name"]))
        return cls(name=str(record.get("name") or PurePath(path).stem), path=str(path))

    def to_record(self) -> dict[str, str]:
        return {"name": self.name, "path": self.path}
