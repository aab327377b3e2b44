"""Read-only access to the dashboard's JSON documents."""

from fastapi import APIRouter, HTTPException, Response, status

from ampboard.api.dependencies import FoldersServiceDep
from ampboard.repositories.config_store import CONFIG_DOCUMENTS

router = APIRouter(prefix="/config")


@router.get("/{name}")
def read_config(name: str, service: FoldersServiceDep) -> Response:
    """Return a config document as stored on disk."""
    if name not in CONFIG_DOCUMENTS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown config file: {name}",
        )
    return Response(content=service.store.read_raw(name), media_type="application/json")
