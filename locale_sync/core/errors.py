"""locale-sync – Error types.

Fatal errors of a sync run. Translation failures never surface here; the
gateway converts them into sentinel values.
"""

from __future__ import annotations

from pathlib import Path


class SyncError(Exception):
    """Base class for errors that abort a sync run."""
    pass


class TreeFileError(SyncError):
    """Raised when a translation file cannot be loaded as a tree."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Error loading file {self.path}: {reason}")


class ReferenceFileError(TreeFileError):
    """Reference file missing, unreadable, malformed or empty."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(path, reason)
        self.args = (f"Reference file {self.path} is empty or invalid: {reason}",)


class TargetFileError(TreeFileError):
    """Target locale file missing or malformed."""

    def __init__(self, locale: str, path: str | Path, reason: str) -> None:
        self.locale = locale
        super().__init__(path, reason)
        self.args = (f"Target file {self.path} for locale '{locale}' is invalid: {reason}",)


class TreeWriteError(TreeFileError):
    """A normalized tree could not be written back to its file."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(path, reason)
        self.args = (f"Error writing file {self.path}: {reason}",)
