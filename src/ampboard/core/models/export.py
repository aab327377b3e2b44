"""Export-related models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UploadsMode(str, Enum):
    """How WordPress ``wp-content/uploads`` is treated when archiving."""

    EXCLUDE = "exclude"
    INCLUDE = "include"
    ONLY = "only"


class ArchiveEngine(str, Enum):
    """Archive engine requested by the caller."""

    BUILTIN = "builtin"
    EXTERNAL = "external"


class Subfolder(BaseModel):
    """An exportable project folder inside a group."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    is_wordpress_root: bool = Field(default=False, alias="isWordPress")
    has_uploads: bool = Field(default=False, alias="hasUploads")


class ExportGroup(BaseModel):
    """A configured column seen from the export side."""

    index: int
    title: str
    dir: str
    subfolders: list[Subfolder] = Field(default_factory=list)


class ArchiveResult(BaseModel):
    """Result of a single archive creation."""

    ok: bool
    path: str | None = None
    file_name: str | None = None
    backend: str | None = None
    entries: int = 0
    message: str | None = None
    error: str | None = None


class ArchiveExportResult(BaseModel):
    """Result returned to callers of the export endpoints."""

    ok: bool
    href: str | None = None
    name: str | None = None
    message: str | None = None
    error: str | None = None
