"""FastAPI application factory."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from ampboard import __version__
from ampboard.api.routers import config, export, folders, health
from ampboard.config import Settings, get_settings
from ampboard.config.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.is_production,
    )
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="AMPBoard",
        description="Local AMP stack dashboard",
        version=__version__,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(folders.router, prefix="/api/v1", tags=["Folders"])
    app.include_router(config.router, prefix="/api/v1", tags=["Config"])
    app.include_router(export.router, prefix="/api/v1", tags=["Export"])

    # Produced archives are downloaded from here; the directory may not exist yet.
    if settings.exports_public_path:
        app.mount(
            f"/{settings.exports_public_path}",
            StaticFiles(directory=Path(settings.exports_dir), check_dir=False),
            name="exports",
        )

    return app


# Create default app instance
app = create_app()


def run() -> None:
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "ampboard.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
