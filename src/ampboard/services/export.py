"""Export service: project archives and database dumps."""

import re
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import structlog

from ampboard.config.settings import Settings
from ampboard.core.exceptions import DatabaseDumpError, ExportDirectoryError
from ampboard.core.models.export import (
    ArchiveEngine,
    ArchiveExportResult,
    ExportGroup,
    UploadsMode,
)
from ampboard.export.archive import ArchiveExporter, default_backends
from ampboard.export.database import DatabaseDumper
from ampboard.export.destination import ExportLocation, ExportsDirectory
from ampboard.export.groups import scan_export_groups
from ampboard.folders.scanner import FolderScanner
from ampboard.repositories.config_store import ConfigStore

logger = structlog.get_logger(__name__)

_UNSAFE_FILE_CHARS = re.compile(r"[^a-zA-Z0-9._-]+")


def safe_file_part(value: str) -> str:
    """Reduce ``value`` to characters safe in a file name."""
    return _UNSAFE_FILE_CHARS.sub("_", value)


class ExportService:
    """Service for archive and database export operations.

    Every operation returns a structured result; failures are reported in
    ``error`` instead of being raised.
    """

    def __init__(
        self,
        settings: Settings,
        store: ConfigStore | None = None,
        dumper: DatabaseDumper | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._settings = settings
        self._store = store or ConfigStore(settings.config_dir)
        self._scanner = FolderScanner(settings.htdocs_path)
        self._dumper = dumper or DatabaseDumper(
            host=settings.db_host,
            user=settings.db_user,
            password=settings.db_password,
            batch_size=settings.dump_batch_size,
        )
        self._exports = ExportsDirectory(settings.exports_dir, settings.exports_public_path)
        self._clock = clock

    def scan_groups(self) -> list[ExportGroup]:
        """List exportable folders grouped by configured column."""
        return scan_export_groups(self._store.load_indexed_columns(), self._scanner)

    def list_databases(self) -> list[str]:
        return self._dumper.list_databases()

    def dump_database(self, db_name: str) -> str:
        """Return the SQL dump of ``db_name``; raises DatabaseDumpError."""
        return self._dumper.dump(db_name)

    def export_folder(
        self,
        group: int,
        folder: str,
        uploads_mode: UploadsMode | str = UploadsMode.EXCLUDE,
        engine: ArchiveEngine | str = ArchiveEngine.BUILTIN,
    ) -> ArchiveExportResult:
        """Archive one project folder of a group into the exports directory."""
        if self._settings.demo_mode:
            return ArchiveExportResult(ok=False, error="Demo mode: export disabled.")

        uploads_mode = UploadsMode(uploads_mode)
        folder = folder.strip()
        if not folder or ".." in folder or "/" in folder or "\\" in folder:
            return ArchiveExportResult(ok=False, error="Invalid folder name.")
        if group < 0:
            return ArchiveExportResult(ok=False, error="Invalid folder selection.")

        columns = dict(self._store.load_indexed_columns())
        column = columns.get(group)
        if column is None:
            return ArchiveExportResult(ok=False, error="Group not found.")

        resolved = self._scanner.resolve_subdirectory(column.dir)
        if not resolved.ok:
            return ArchiveExportResult(ok=False, error=resolved.error)
        source = Path(resolved.path) / folder
        if not source.is_dir():
            return ArchiveExportResult(ok=False, error="Folder no longer exists on disk.")

        location = self._location()
        if isinstance(location, ArchiveExportResult):
            return location

        kind = "uploads-" if uploads_mode == UploadsMode.ONLY else ""
        zip_name = f"files-{safe_file_part(folder)}-{kind}{self._stamp()}.zip"

        exporter = ArchiveExporter(default_backends(engine))
        result = exporter.create_archive(
            source,
            location.path / zip_name,
            exclude_folder_names=self._settings.export_exclude,
            include_wp_uploads=uploads_mode == UploadsMode.INCLUDE,
            only_uploads=uploads_mode == UploadsMode.ONLY,
        )
        if not result.ok or not result.file_name:
            detail = result.error or "Unknown reason"
            return ArchiveExportResult(ok=False, error=f"Failed to create archive: {detail}")

        logger.info("Folder exported", group=group, folder=folder, archive=result.file_name)
        return ArchiveExportResult(
            ok=True,
            href=location.href(result.file_name),
            name=result.file_name,
            message=result.message,
        )

    def export_database(
        self,
        db_name: str,
        engine: ArchiveEngine | str = ArchiveEngine.BUILTIN,
    ) -> ArchiveExportResult:
        """Dump a database to SQL and archive it into the exports directory."""
        if self._settings.demo_mode:
            return ArchiveExportResult(ok=False, error="Demo mode: export disabled.")

        db_name = db_name.strip()
        if not db_name:
            return ArchiveExportResult(ok=False, error="No database selected.")

        location = self._location()
        if isinstance(location, ArchiveExportResult):
            return location

        base_name = f"db-{safe_file_part(db_name)}-{self._stamp()}"
        sql_path = location.path / f"{base_name}.sql"

        try:
            try:
                with sql_path.open("w", encoding="utf-8", newline="\n") as fh:
                    self._dumper.dump_to(db_name, fh)
            except DatabaseDumpError as e:
                logger.error("Database dump failed", database=db_name, error=e.message)
                return ArchiveExportResult(ok=False, error=e.message)
            except OSError as e:
                logger.error("Failed to write SQL dump", path=str(sql_path), error=str(e))
                return ArchiveExportResult(ok=False, error="Failed to write SQL dump.")

            exporter = ArchiveExporter(default_backends(engine))
            result = exporter.create_file_archive(sql_path, location.path / f"{base_name}.zip")
        finally:
            sql_path.unlink(missing_ok=True)

        if not result.ok or not result.file_name:
            detail = result.error or "Unknown reason"
            return ArchiveExportResult(ok=False, error=f"Failed to create archive: {detail}")

        logger.info("Database exported", database=db_name, archive=result.file_name)
        return ArchiveExportResult(
            ok=True,
            href=location.href(result.file_name),
            name=result.file_name,
            message=result.message,
        )

    def _location(self) -> ExportLocation | ArchiveExportResult:
        try:
            return self._exports.ensure()
        except ExportDirectoryError as e:
            logger.error("Exports directory unavailable", error=e.message)
            return ArchiveExportResult(ok=False, error=e.message)

    def _stamp(self) -> str:
        return self._clock().strftime("%Y%m%d-%H%M%S")
