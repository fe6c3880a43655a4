"""Exception hierarchy raised by the detection engine."""

from __future__ import annotations

from pathlib import Path


class DirectiveCheckError(Exception):
    """Base class for directivecheck failures that carry the offending path."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class RootNotFoundError(DirectiveCheckError, FileNotFoundError):
    """Raised when the project root does not exist."""


class RootUnreadableError(DirectiveCheckError, OSError):
    """Raised when the project root is not a directory or cannot be listed."""


class SubdirectoryUnreadableError(DirectiveCheckError, OSError):
    """Raised when a directory below the root cannot be listed mid-traversal."""


class FileReadError(DirectiveCheckError, OSError):
    """Raised when a candidate file cannot be read or decoded as UTF-8."""


__all__ = [
    "DirectiveCheckError",
    "FileReadError",
    "RootNotFoundError",
    "RootUnreadableError",
    "SubdirectoryUnreadableError",
]
