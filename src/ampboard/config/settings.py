"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EXPORT_EXCLUDES = [".git", ".idea", ".vscode", "node_modules", "vendor", "dist", "build"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    demo_mode: bool = False

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    # Filesystem
    htdocs_path: str = "~/htdocs"
    config_dir: str = "~/.ampboard/config"
    exports_dir: str = "~/.ampboard/dist/exports"
    exports_public_path: str = "dist/exports"

    # MySQL (credentials arrive already decrypted)
    db_host: str = "localhost"
    db_user: str = "root"
    db_password: str = ""
    dump_batch_size: int = Field(default=200, ge=1)

    # Export
    export_exclude: list[str] = Field(default_factory=lambda: list(DEFAULT_EXPORT_EXCLUDES))

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.htdocs_path = str(Path(self.htdocs_path).expanduser())
        self.config_dir = str(Path(self.config_dir).expanduser())
        self.exports_dir = str(Path(self.exports_dir).expanduser())
        self.exports_public_path = self.exports_public_path.strip("/")
        names = [str(name).strip() for name in self.export_exclude]
        self.export_exclude = list(dict.fromkeys(name for name in names if name))

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
