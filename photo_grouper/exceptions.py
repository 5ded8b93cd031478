"""
Custom exception hierarchy for the photo grouper.

Planning errors are raised to the caller and abort the whole run; nothing
is written to disk until a complete plan exists.
"""
from pathlib import Path


class PhotoGrouperError(Exception):
    """Base exception for all photo grouper errors."""
    pass


class NonUtf8PathError(PhotoGrouperError):
    """Raised when a path cannot be represented as UTF-8 text."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"path {path!r} is not valid utf-8")


class NoBasenameError(PhotoGrouperError):
    """Raised when a path has no file name component."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"file '{path}' has no basename")


class MissingSourceError(PhotoGrouperError):
    """Raised when a derived file references a source that was not found."""

    def __init__(self, derived: Path, source: Path):
        self.derived = derived
        self.source = source
        super().__init__(f"'{derived}' is derived from '{source}', which does not exist")


class MetadataError(PhotoGrouperError):
    """Raised when embedded metadata cannot be written."""
    pass


class FileOperationError(PhotoGrouperError):
    """Raised when a filesystem operation (listing, mkdir, copy/move) fails."""
    pass
