"""Business logic services for AMPBoard."""

from ampboard.services.export import ExportService
from ampboard.services.folders import FoldersService

__all__ = [
    "ExportService",
    "FoldersService",
]
