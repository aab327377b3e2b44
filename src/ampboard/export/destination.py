"""Exports directory provisioning."""

from dataclasses import dataclass
from pathlib import Path

import structlog

from ampboard.core.exceptions import ExportDirectoryError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExportLocation:
    """Where archives are written and the URL path they are served from."""

    path: Path
    public_path: str

    def href(self, file_name: str) -> str:
        return f"{self.public_path}/{file_name}" if self.public_path else file_name


class ExportsDirectory:
    """Provides a writable output directory for archives."""

    def __init__(self, path: str | Path, public_path: str = "dist/exports") -> None:
        self._path = Path(path)
        self._public_path = public_path.strip("/")

    def ensure(self) -> ExportLocation:
        """Create the directory if needed; raises ExportDirectoryError."""
        try:
            self._path.mkdir(mode=0o775, parents=True, exist_ok=True)
        except OSError as e:
            raise ExportDirectoryError(
                f"Cannot create exports directory: {self._path}",
                details={"error": str(e)},
            ) from e

        logger.debug("Exports directory ready", path=str(self._path))
        return ExportLocation(path=self._path, public_path=self._public_path)
