"""Exception hierarchy for AMPBoard."""

from typing import Any


class AMPBoardError(Exception):
    """Base exception for all AMPBoard errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ExportError(AMPBoardError):
    """Base class for archive and database export failures."""


class ArchiveError(ExportError):
    """An archive backend failed to produce an archive."""


class ExportDirectoryError(ExportError):
    """The exports directory could not be provisioned."""


class DatabaseDumpError(ExportError):
    """A database dump could not be produced."""


class DatabaseConnectionError(DatabaseDumpError):
    """The database server could not be reached or rejected the credentials."""


class StreamingConflictError(DatabaseDumpError):
    """A query was issued while an unbuffered row stream was still open."""
