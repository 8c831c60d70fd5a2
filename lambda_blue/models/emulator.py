"""Data model for emulators and the emulator registry."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from lambda_blue.errors import (
    DuplicateEmulatorError,
    EmulatorNotFoundError,
    StaleIndexError,
)
from lambda_blue.models.rom import Rom

EXIT_LABEL = "Exit"


@dataclass
class Emulator:
    """A launchable emulator and the ROMs attached to it."""

    name: str
    """Unique name; used as menu label and as the executable's file name."""

    roms: list[Rom] = field(default_factory=list)
    """Attached ROMs in attach order, without duplicates."""

    loaded_rom: Rom | None = field(default=None, compare=False)
    """ROM selected during the current session.  Never persisted."""

    def load_rom(self, rom: Rom) -> None:
        """Attach *rom* (if new) and make it the loaded ROM."""
        if rom not in self.roms:
            self.roms.append(rom)
        self.loaded_rom = rom

    @property
    def rom_names(self) -> list[str]:
        return [r.name for r in self.roms]

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Emulator:
        emulator = cls(name=str(record["name"]))
        for rom_record in record.get("roms", []):
            rom = Rom.from_record(rom_record)
            if rom not in emulator.roms:
                emulator.roms.append(rom)
        return emulator

    def to_record(self) -> dict[str, Any]:
        return {"name": self.name, "roms": [r.to_record() for r in self.roms]}


class Emulators:
    """Ordered registry of emulators, in menu display order.

    Indices handed to the registry always come from a list the caller
    obtained from the same registry (:meth:`names_for_menu`,
    :meth:`rom_labels`).  An index outside the registry therefore means
    the caller kept a stale index across a screen change, and
    :class:`StaleIndexError` is raised instead of guessing.
    """

    def __init__(self, emulators: Iterable[Emulator] = ()) -> None:
        self._emulators: list[Emulator] = []
        self.dirty = False
        for emulator in emulators:
            if any(e.name == emulator.name for e in self._emulators):
                raise DuplicateEmulatorError(
                    f"Emulator {emulator.name!r} is listed more than once"
                )
            self._emulators.append(emulator)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_names(cls, names: Iterable[str]) -> Emulators:
        """Build a fresh registry with no ROMs attached."""
        return cls(Emulator(name) for name in names)

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> Emulators:
        return cls(Emulator.from_record(r) for r in records)

    def to_records(self) -> list[dict[str, Any]]:
        return [e.to_record() for e in self._emulators]

    def clone(self) -> Emulators:
        """Return a deep copy that can be mutated independently."""
        other = Emulators(copy.deepcopy(self._emulators))
        other.dirty = self.dirty
        return other

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._emulators)

    def __iter__(self) -> Iterator[Emulator]:
        return iter(self._emulators)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Emulators):
            return NotImplemented
        return self._emulators == other._emulators

    def __repr__(self) -> str:
        return f"Emulators({self._emulators!r})"

    @property
    def names(self) -> list[str]:
        return [e.name for e in self._emulators]

    def names_for_menu(self, exit_label: str = EXIT_LABEL) -> list[str]:
        """Emulator names in display order followed by the exit label."""
        return [*self.names, exit_label]

    def index_of(self, name: str) -> int:
        for i, emulator in enumerate(self._emulators):
            if emulator.name == name:
                return i
        raise EmulatorNotFoundError(name)

    def index_of_emulator(self, emulator: Emulator) -> int:
        return self.index_of(emulator.name)

    def rom_labels(self, index: int) -> list[str]:
        return self._get(index).rom_names

    def rom_at(self, index: int, rom_index: int) -> Rom:
        roms = self._get(index).roms
        if not 0 <= rom_index < len(roms):
            raise StaleIndexError(
                f"ROM index {rom_index} out of range for {self._emulators[index].name!r}"
            )
        return roms[rom_index]

    def snapshot(self, index: int) -> Emulator:
        """Return a copy of one emulator that is safe to mutate."""
        return copy.deepcopy(self._get(index))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def attach_rom(self, index: int, rom: Rom) -> None:
        """Attach *rom* to the emulator at *index* and mark it loaded."""
        self._get(index).load_rom(rom)
        self.dirty = True

    def mark_clean(self) -> None:
        self.dirty = False

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _get(self, index: int) -> Emulator:
        if not 0 <= index < len(self._emulators):
            raise StaleIndexError(
                f"Emulator index {index} out of range (registry has {len(self._emulators)})"
            )
        return self._emulators[index]
