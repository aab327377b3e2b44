"""Folder listing result models."""

from pydantic import BaseModel, Field


class ResolvedDirectory(BaseModel):
    """Outcome of anchoring a configured ``dir`` under the project root."""

    path: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class RenderedColumn(BaseModel):
    """One rendered folder column."""

    title: str
    href: str | None = None
    dir: str
    items: list[str] = Field(default_factory=list)
    html: str = ""
    error: str | None = None


class FoldersListing(BaseModel):
    """The full folders view: markup, per-column data and collected errors."""

    html: str
    errors: list[str] = Field(default_factory=list)
    columns: list[RenderedColumn] = Field(default_factory=list)
