"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from ampboard.config import Settings
from ampboard.services.export import ExportService
from ampboard.services.folders import FoldersService


def get_settings_dep(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_folders_service(settings: Annotated[Settings, Depends(get_settings_dep)]) -> FoldersService:
    """Build the folders service; configuration is re-read per request."""
    return FoldersService(settings)


def get_export_service(settings: Annotated[Settings, Depends(get_settings_dep)]) -> ExportService:
    """Build the export service for the current settings."""
    return ExportService(settings)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings_dep)]
FoldersServiceDep = Annotated[FoldersService, Depends(get_folders_service)]
ExportServiceDep = Annotated[ExportService, Depends(get_export_service)]
