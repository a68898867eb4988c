"""Exception types raised by the patch engine."""

from __future__ import annotations

from typing import Optional


class CctweakError(Exception):
    """Base class for all cctweak errors."""


class LocationNotFoundError(CctweakError):
    """Raised when a locator cannot find its customization point."""

    def __init__(self, point: str, detail: str = ""):
        self.point = point
        self.detail = detail
        message = f"{point}: failed to find location"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class SerializationError(CctweakError):
    """Raised when an external generator fails to produce a value."""


class OverlappingEditsError(CctweakError):
    """Raised when a writer produces edits whose spans intersect."""


class InvalidEditError(CctweakError):
    """Raised when an edit refers to a range outside the current buffer."""


class BundleIOError(CctweakError):
    """Raised when the bundle or its backup cannot be read or written."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message if path is None else f"{message}: {path}")


class ConfigError(CctweakError):
    """Raised when the settings file exists but cannot be loaded."""


class PatchLockError(CctweakError):
    """Raised when another cctweak process holds the patch lock."""

    def __init__(self, pid: int, lock_file: str):
        self.pid = pid
        self.lock_file = lock_file
        super().__init__(
            f"another cctweak run is in progress (PID: {pid}, lock: {lock_file})"
        )
