"""JSON-backed configuration store."""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from ampboard.core.models.column import Column
from ampboard.core.models.dock import DockItem
from ampboard.core.models.template import Template
from ampboard.folders.templates import index_templates

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Document name -> file name inside the config directory.
CONFIG_DOCUMENTS = {
    "folders": "folders.json",
    "link_templates": "link_templates.json",
    "dock": "dock.json",
}


class ConfigStore:
    """Reads the dashboard's JSON documents from a config directory.

    Each document is a JSON array of records. Missing, empty or invalid
    files read as an empty list; records that do not validate are
    skipped. Nothing is cached: every call reads the file again.
    """

    def __init__(self, config_dir: str | Path) -> None:
        self._config_dir = Path(config_dir)

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    def path_for(self, name: str) -> Path:
        """Return the file path of a named document."""
        if name not in CONFIG_DOCUMENTS:
            raise KeyError(name)
        return self._config_dir / CONFIG_DOCUMENTS[name]

    def load_columns(self) -> list[Column]:
        """Load folder columns in their persisted order."""
        return [column for _, column in self.load_indexed_columns()]

    def load_indexed_columns(self) -> list[tuple[int, Column]]:
        """Load folder columns paired with their position in folders.json."""
        return list(self._iter_models("folders", Column))

    def load_templates(self) -> list[Template]:
        """Load link templates."""
        return self._load_models("link_templates", Template)

    def load_dock_items(self) -> list[DockItem]:
        """Load dock items in their persisted order."""
        return self._load_models("dock", DockItem)

    def templates_by_name(self) -> dict[str, Template]:
        """Load link templates keyed by name."""
        return index_templates(self.load_templates())

    def read_records(self, name: str) -> list[Any]:
        """Read a document as raw JSON records."""
        path = self.path_for(name)
        if not path.is_file():
            return []

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to read config file", path=str(path), error=str(e))
            return []
        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Config file JSON decode failed", path=str(path), error=str(e))
            return []

        if isinstance(data, dict):
            data = list(data.values())
        if not isinstance(data, list):
            logger.warning("Config file root is not an array", path=str(path))
            return []
        return data

    def read_raw(self, name: str) -> str:
        """Return the document text as stored, or ``[]`` when unreadable."""
        path = self.path_for(name)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError:
            return "[]"
        return raw if raw.strip() else "[]"

    def _load_models(self, name: str, model: type[ModelT]) -> list[ModelT]:
        return [record for _, record in self._iter_models(name, model)]

    def _iter_models(self, name: str, model: type[ModelT]) -> Iterator[tuple[int, ModelT]]:
        for position, record in enumerate(self.read_records(name)):
            if not isinstance(record, dict):
                logger.warning("Skipping non-object record", document=name, position=position)
                continue
            try:
                yield position, model.model_validate(record)
            except ValidationError as e:
                logger.warning(
                    "Skipping invalid record",
                    document=name,
                    position=position,
                    error=str(e),
                )
