"""Core domain models and exceptions for AMPBoard."""

from ampboard.core.exceptions import (
    AMPBoardError,
    ArchiveError,
    DatabaseConnectionError,
    DatabaseDumpError,
    ExportDirectoryError,
    ExportError,
    StreamingConflictError,
)
from ampboard.core.models import (
    ArchiveEngine,
    ArchiveExportResult,
    ArchiveResult,
    Column,
    DockItem,
    ExportGroup,
    FoldersListing,
    RenderedColumn,
    ResolvedDirectory,
    Subfolder,
    Template,
    UploadsMode,
    UrlRules,
)

__all__ = [
    # Models
    "Column",
    "UrlRules",
    "Template",
    "DockItem",
    "ExportGroup",
    "Subfolder",
    "ResolvedDirectory",
    "RenderedColumn",
    "FoldersListing",
    "ArchiveResult",
    "ArchiveExportResult",
    "ArchiveEngine",
    "UploadsMode",
    # Exceptions
    "AMPBoardError",
    "ExportError",
    "ArchiveError",
    "ExportDirectoryError",
    "DatabaseDumpError",
    "DatabaseConnectionError",
    "StreamingConflictError",
]
