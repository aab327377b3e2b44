"""Folder listing service."""

from ampboard.config.settings import Settings
from ampboard.core.models.listing import FoldersListing
from ampboard.folders.renderer import FoldersRenderer
from ampboard.folders.scanner import FolderScanner
from ampboard.repositories.config_store import ConfigStore


class FoldersService:
    """Renders the folders view from the current configuration files."""

    def __init__(self, settings: Settings, store: ConfigStore | None = None) -> None:
        self._settings = settings
        self._store = store or ConfigStore(settings.config_dir)
        self._renderer = FoldersRenderer(FolderScanner(settings.htdocs_path))

    @property
    def store(self) -> ConfigStore:
        return self._store

    def render(self) -> FoldersListing:
        """Render every configured column. Configuration is re-read each call."""
        return self._renderer.render(
            self._store.load_columns(),
            self._store.templates_by_name(),
        )
