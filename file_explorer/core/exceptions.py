# file_explorer/core/exceptions.py

"""Exception hierarchy for the explorer core."""

from pathlib import Path


class ExplorerError(Exception):
    """
    Base exception for every error raised by the explorer core.

    Attributes:
        path: The filesystem path the failing operation was working on, if any.
        cause: The original exception that triggered this error, if any.
    """

    def __init__(self, message: str, *, path: str | Path | None = None, cause: BaseException | None = None):
        super().__init__(message)
        self.path = str(path) if path is not None else None
        self.cause = cause


class InvalidOperationError(ExplorerError):
    """Raised when an operation is used incorrectly (e.g. moving an item onto itself)."""


class FileOperationError(ExplorerError):
    """Raised when the operating system rejects a move, copy or create."""


class DirectoryNotFoundError(ExplorerError):
    """Raised when a path does not resolve to a readable directory."""
