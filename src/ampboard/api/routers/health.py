"""Health check endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel

from ampboard import __version__
from ampboard.api.dependencies import SettingsDep

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str
    environment: str
    demo_mode: bool


@router.get("/health", response_model=HealthResponse)
def health(settings: SettingsDep) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        demo_mode=settings.demo_mode,
    )
