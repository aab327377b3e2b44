"""Export endpoints: project archives and database dumps."""

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from ampboard.api.dependencies import ExportServiceDep
from ampboard.core.models.export import (
    ArchiveEngine,
    ArchiveExportResult,
    ExportGroup,
    UploadsMode,
)

router = APIRouter(prefix="/export")


# --- Request models ---

class ExportFolderRequest(BaseModel):
    """Request to archive one folder of an export group."""

    model_config = ConfigDict(populate_by_name=True)

    group: int = Field(default=-1, description="Position of the column in folders.json")
    folder: str = Field(default="", max_length=255)
    uploads_mode: UploadsMode = Field(default=UploadsMode.EXCLUDE, alias="uploadsMode")
    engine: ArchiveEngine = ArchiveEngine.BUILTIN


class ExportDatabaseRequest(BaseModel):
    """Request to dump and archive one database."""

    db: str = Field(default="", max_length=255)
    engine: ArchiveEngine = ArchiveEngine.BUILTIN


class DatabaseListResponse(BaseModel):
    databases: list[str]


# Export endpoints are sync so a long archive runs in the threadpool.

@router.get("/groups", response_model=list[ExportGroup])
def list_groups(service: ExportServiceDep) -> list[ExportGroup]:
    """List exportable folders grouped by column."""
    return service.scan_groups()


@router.post("/folders", response_model=ArchiveExportResult)
def export_folder(request: ExportFolderRequest, service: ExportServiceDep) -> ArchiveExportResult:
    """Archive a project folder and return its download link."""
    return service.export_folder(
        group=request.group,
        folder=request.folder,
        uploads_mode=request.uploads_mode,
        engine=request.engine,
    )


@router.get("/databases", response_model=DatabaseListResponse)
def list_databases(service: ExportServiceDep) -> DatabaseListResponse:
    """List user databases on the configured server."""
    return DatabaseListResponse(databases=service.list_databases())


@router.post("/databases", response_model=ArchiveExportResult)
def export_database(
    request: ExportDatabaseRequest,
    service: ExportServiceDep,
) -> ArchiveExportResult:
    """Dump a database, archive the dump and return its download link."""
    return service.export_database(request.db, engine=request.engine)
