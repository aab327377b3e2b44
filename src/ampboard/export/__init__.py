"""Archive and database export engine."""

from ampboard.export.archive import (
    ArchiveBackend,
    ArchiveExporter,
    ExternalZipBackend,
    TarBackend,
    TarGzBackend,
    ZipBackend,
    default_backends,
)
from ampboard.export.database import DatabaseDumper
from ampboard.export.destination import ExportLocation, ExportsDirectory
from ampboard.export.groups import scan_export_groups

__all__ = [
    "ArchiveBackend",
    "ArchiveExporter",
    "DatabaseDumper",
    "ExportLocation",
    "ExportsDirectory",
    "ExternalZipBackend",
    "TarBackend",
    "TarGzBackend",
    "ZipBackend",
    "default_backends",
    "scan_export_groups",
]
