from lambda_blue.models.emulator import Emulator, Emulators
from lambda_blue.models.rom import Rom

__all__ = ["Emulator", "Emulators", "Rom"]
