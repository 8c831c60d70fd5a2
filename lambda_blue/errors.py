"""Exception hierarchy for the launcher.

Only the load errors are expected at runtime (first start, deleted or
corrupted ``emulators.json``) and they are always recovered by falling
back to the default registry.  Everything else signals either a logic
defect or an unrecoverable I/O failure and is left to propagate.
"""


class LambdaBlueError(Exception):
    """Base class for all launcher errors."""


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class EmulatorNotFoundError(LambdaBlueError, KeyError):
    """No emulator with the requested name exists in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"No emulator named {self.name!r}"


class StaleIndexError(LambdaBlueError, IndexError):
    """An index that does not refer to an emulator of the registry."""


class DuplicateEmulatorError(LambdaBlueError, ValueError):
    """Two emulators share the same name."""


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

class RegistryLoadError(LambdaBlueError):
    """The persisted registry could not be loaded."""


class RegistryReadError(RegistryLoadError):
    """The registry file is missing or unreadable."""


class RegistryEmptyError(RegistryLoadError):
    """The registry file exists but holds nothing."""


class RegistryParseError(RegistryLoadError):
    """The registry file is not a valid serialized registry."""


class RegistrySaveError(LambdaBlueError):
    """Writing the registry file failed."""


# ---------------------------------------------------------------------------
# Navigation / launch
# ---------------------------------------------------------------------------

class NavigationError(LambdaBlueError):
    """An event was delivered that the current menu cannot handle."""


class LaunchError(LambdaBlueError):
    """The emulator process could not be started."""
