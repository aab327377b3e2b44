"""Domain models for AMPBoard."""

from ampboard.core.models.column import Column, UrlRules
from ampboard.core.models.dock import DockItem
from ampboard.core.models.export import (
    ArchiveEngine,
    ArchiveExportResult,
    ArchiveResult,
    ExportGroup,
    Subfolder,
    UploadsMode,
)
from ampboard.core.models.listing import FoldersListing, RenderedColumn, ResolvedDirectory
from ampboard.core.models.template import Template

__all__ = [
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
]
