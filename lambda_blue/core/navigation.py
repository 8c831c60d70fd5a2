"""Menu navigation state machine.

The engine owns the registry for the duration of one menu session and
reacts to two kinds of events coming from the presentation layer:

* :meth:`NavigationEngine.activate` — the item at a position of the
  current menu was clicked;
* :meth:`NavigationEngine.cancel` — Escape was pressed or the window
  was closed.

Every menu item carries a :class:`ItemRole` next to its label.  Reserved
labels ("Exit", "Load Rom", "Back") are only matched when the items are
built, so a ROM that happens to be called ``Back`` still behaves as a ROM.

The registry is never mutated in place.  A transition that changes it
works on a clone, persists the clone and only then adopts it, so a
half-updated registry is never visible to anyone.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol, Sequence, TypeVar, Union

from loguru import logger

from lambda_blue.config import MenuConfig
from lambda_blue.errors import NavigationError
from lambda_blue.models.emulator import Emulator, Emulators
from lambda_blue.models.rom import Rom

T = TypeVar("T")

FileChooser = Callable[[], Optional[str]]


class RegistryWriter(Protocol):
    def save(self, registry: Emulators) -> None: ...


# -----------------------------------------------------------------------
# Menu items and outcomes
# -----------------------------------------------------------------------

class Screen(str, Enum):
    """Kind of menu currently on screen."""

    ROOT = "root"
    ROMS = "roms"


class ItemRole(str, Enum):
    """What activating a menu item does, independent of its text."""

    EMULATOR = "emulator"
    EXIT = "exit"
    ROM = "rom"
    LOAD_ROM = "load_rom"
    BACK = "back"


@dataclass(frozen=True)
class MenuItem:
    label: str
    role: ItemRole
    index: int | None = None
    """Emulator index for EMULATOR items, ROM index for ROM items."""


@dataclass(frozen=True)
class Launch:
    """Terminal outcome: start *emulator* with its loaded ROM."""

    emulator: Emulator

    def __post_init__(self) -> None:
        if self.emulator.loaded_rom is None:
            raise ValueError(f"Emulator {self.emulator.name!r} has no loaded ROM")

    @property
    def rom(self) -> Rom:
        return self.emulator.loaded_rom  # type: ignore[return-value]


@dataclass(frozen=True)
class Quit:
    """Terminal outcome: leave the launcher."""


Outcome = Union[Launch, Quit]


def first_hit(regions: Sequence[T], contains: Callable[[T], bool]) -> int | None:
    """Return the position of the first region accepted by *contains*.

    Regions are tested in display order and testing stops at the first
    match, so overlapping items always resolve to the topmost entry.
    """
    for i, region in enumerate(regions):
        if contains(region):
            return i
    return None


# -----------------------------------------------------------------------
# Engine
# -----------------------------------------------------------------------

class NavigationEngine:
    """State machine driving the root menu and the per-emulator ROM menus."""

    def __init__(
        self,
        registry: Emulators,
        store: RegistryWriter,
        choose_file: FileChooser,
        menu: MenuConfig | None = None,
    ) -> None:
        self._registry = registry
        self._store = store
        self._choose_file = choose_file
        self._menu = menu or MenuConfig()
        self._screen = Screen.ROOT
        self._emulator_index: int | None = None
        self._outcome: Outcome | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def registry(self) -> Emulators:
        return self._registry

    @property
    def screen(self) -> Screen:
        return self._screen

    @property
    def emulator_index(self) -> int | None:
        """Emulator whose ROM menu is shown, ``None`` on the root menu."""
        return self._emulator_index

    @property
    def outcome(self) -> Outcome | None:
        return self._outcome

    @property
    def finished(self) -> bool:
        return self._outcome is not None

    def items(self) -> list[MenuItem]:
        """Items of the current menu, in display order."""
        if self._screen is Screen.ROOT:
            return self._root_items()
        return self._rom_items(self._emulator_index)  # type: ignore[arg-type]

    def labels(self) -> list[str]:
        return [item.label for item in self.items()]

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def activate(self, position: int) -> Outcome | None:
        """Handle a click on the item at *position* of the current menu.

        Returns the terminal outcome if the transition ends the session,
        ``None`` if a (possibly unchanged) menu is still on screen.
        """
        if self._outcome is not None:
            raise NavigationError("Menu session already finished")

        items = self.items()
        if not 0 <= position < len(items):
            raise NavigationError(
                f"No item at position {position} ({len(items)} items on screen)"
            )
        item = items[position]
        logger.debug("Activated {!r} ({}) on {} menu", item.label, item.role.value, self._screen.value)

        if item.role is ItemRole.EXIT:
            return self._finish(Quit())
        if item.role is ItemRole.EMULATOR:
            self._show_roms(item.index)  # type: ignore[arg-type]
            return None
        if item.role is ItemRole.BACK:
            self._show_root()
            return None
        index = self._emulator_index
        if index is None:
            raise NavigationError(f"{item.role.value} item activated outside a ROM menu")
        if item.role is ItemRole.LOAD_ROM:
            return self._load_new_rom(index)
        return self._load_attached_rom(index, item.index)  # type: ignore[arg-type]

    def cancel(self) -> Quit:
        """Leave the menu immediately without saving anything."""
        if self._outcome is not None:
            raise NavigationError("Menu session already finished")
        logger.debug("Menu cancelled on {} menu", self._screen.value)
        return self._finish(Quit())  # type: ignore[return-value]

    def restart(self, registry: Emulators | None = None) -> None:
        """Start a new session on the root menu, optionally with a new registry."""
        if registry is not None:
            self._registry = registry
        self._outcome = None
        self._show_root()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _root_items(self) -> list[MenuItem]:
        names = self._registry.names_for_menu(self._menu.exit_label)
        items = [MenuItem(name, ItemRole.EMULATOR, i) for i, name in enumerate(names[:-1])]
        items.append(MenuItem(names[-1], ItemRole.EXIT))
        return items

    def _rom_items(self, index: int) -> list[MenuItem]:
        items = [
            MenuItem(label, ItemRole.ROM, i)
            for i, label in enumerate(self._registry.rom_labels(index))
        ]
        items.append(MenuItem(self._menu.load_rom_label, ItemRole.LOAD_ROM))
        items.append(MenuItem(self._menu.back_label, ItemRole.BACK))
        return items

    def _show_root(self) -> None:
        self._screen = Screen.ROOT
        self._emulator_index = None

    def _show_roms(self, index: int) -> None:
        self._screen = Screen.ROMS
        self._emulator_index = index

    def _finish(self, outcome: Outcome) -> Outcome:
        self._outcome = outcome
        return outcome

    def _load_new_rom(self, index: int) -> Outcome | None:
        path = self._choose_file()
        if not path:
            logger.info("No ROM chosen, staying on the ROM menu")
            return None

        working = self._registry.clone()
        working.attach_rom(index, Rom.from_path(path))
        self._store.save(working)
        self._registry = working

        emulator = working.snapshot(index)
        logger.info("Attached {} to {}", path, emulator.name)
        return self._finish(Launch(emulator))

    def _load_attached_rom(self, index: int, rom_index: int) -> Outcome:
        rom = self._registry.rom_at(index, rom_index)

        # Already attached and saved: only the snapshot gets the loaded ROM.
        emulator = self._registry.snapshot(index)
        emulator.load_rom(rom)
        logger.info("Selected {} for {}", rom.name, emulator.name)
        return self._finish(Launch(emulator))
