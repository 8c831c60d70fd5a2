"""Lambda Blue — a small menu launcher for emulators."""

__version__ = "0.2.0"
