"""Test doubles for the presentation and persistence collaborators."""

import threading

from lambda_blue.models.emulator import Emulators


class RecordingStore:
    """In-memory stand-in for ``RegistryStore`` that remembers saves."""

    def __init__(self) -> None:
        self.saved: list[list[dict]] = []

    def save(self, registry: Emulators) -> None:
        self.saved.append(registry.to_records())
        registry.mark_clean()


class FailingStore:
    def save(self, registry: Emulators) -> None:
        from lambda_blue.errors import RegistrySaveError
        raise RegistrySaveError("disk full")


class ScriptedChooser:
    """File chooser returning queued answers; ``None`` means cancelled."""

    def __init__(self, *answers) -> None:
        self._answers = list(answers)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self._answers.pop(0) if self._answers else None


class StubStore:
    """Keeps the "saved" registry as records; counts every load."""

    def __init__(self, records=None) -> None:
        self.records = records
        self.loads = 0
        self.saved: list[list[dict]] = []
        self.error = None

    def load_or_default(self, known_emulators) -> Emulators:
        self.loads += 1
        if self.records is None:
            return Emulators.from_names(known_emulators)
        return Emulators.from_records(self.records)

    def save(self, registry: Emulators) -> None:
        if self.error is not None:
            raise self.error
        self.records = registry.to_records()
        self.saved.append(self.records)
        registry.mark_clean()


class StubLauncher:
    """Records launches; blocks until ``release`` is set."""

    def __init__(self, error=None) -> None:
        self.launched = []
        self.error = error
        self.release = threading.Event()
        self.release.set()

    def launch(self, emulator) -> int:
        self.launched.append(emulator)
        self.release.wait(5)
        if self.error is not None:
            raise self.error
        return 0
