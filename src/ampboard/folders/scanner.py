"""Project folder scanner."""

import os
from pathlib import Path

import structlog

from ampboard.core.models.listing import ResolvedDirectory
from ampboard.utils.sorting import natural_sorted

logger = structlog.get_logger(__name__)

TRAVERSAL_ERROR = 'Security: directory traversal detected in "dir".'


class FolderScanner:
    """Lists project folders below a configured project root.

    Every configured ``dir`` goes through :meth:`resolve_subdirectory`
    before it touches the filesystem.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def resolve_subdirectory(self, relative_path: str) -> ResolvedDirectory:
        """Anchor a configured relative directory under the project root.

        Both slash styles are accepted. Any path containing ``..`` is
        rejected, however its separators are written.
        """
        subdir = normalise_path(str(relative_path)).strip(os.sep)
        if ".." in subdir:
            logger.warning("Rejected directory traversal", dir=relative_path)
            return ResolvedDirectory(path="", error=TRAVERSAL_ERROR)

        path = self._root / subdir if subdir else self._root
        return ResolvedDirectory(path=str(path))

    @staticmethod
    def list_subdirectories(base_dir: str | Path) -> list[str]:
        """Return the names of the immediate subdirectories of ``base_dir``.

        Missing or unreadable directories yield an empty list.
        """
        base = Path(base_dir)
        if not base.is_dir():
            return []

        names = []
        try:
            with os.scandir(base) as entries:
                for entry in entries:
                    if entry.name in (".", ".."):
                        continue
                    try:
                        if entry.is_dir():
                            names.append(entry.name)
                    except OSError:
                        continue
        except OSError as e:
            logger.warning("Failed to list directory", dir=str(base), error=str(e))
            return []

        return natural_sorted(names)


def normalise_path(path: str) -> str:
    """Convert both slash styles to the native separator and drop trailing ones."""
    path = path.replace("/", os.sep).replace("\\", os.sep)
    return path.rstrip(os.sep)


def is_wordpress_root(path: str | Path) -> bool:
    """A WordPress root has ``wp-config.php`` or a ``wp-content`` directory."""
    base = Path(path)
    return (base / "wp-config.php").is_file() or (base / "wp-content").is_dir()


def has_wordpress_uploads(path: str | Path) -> bool:
    """Check for a ``wp-content/uploads`` directory below ``path``."""
    return (Path(path) / "wp-content" / "uploads").is_dir()
