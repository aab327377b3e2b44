"""Folder listing endpoints."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from ampboard.api.dependencies import FoldersServiceDep
from ampboard.core.models.listing import FoldersListing

router = APIRouter(prefix="/folders")


@router.get("", response_model=FoldersListing)
def list_folders(service: FoldersServiceDep) -> FoldersListing:
    """Render every configured column and return markup, items and errors."""
    return service.render()


@router.get("/html", response_class=HTMLResponse)
def folders_html(service: FoldersServiceDep) -> HTMLResponse:
    """Return only the rendered folder columns."""
    return HTMLResponse(service.render().html)
