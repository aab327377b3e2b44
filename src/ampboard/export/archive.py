"""Directory and file archiving with pluggable backends."""

import importlib.util
import os
import re
import shutil
import subprocess
import tarfile
import zipfile
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

import structlog

from ampboard.core.exceptions import ArchiveError
from ampboard.core.models.export import ArchiveEngine, ArchiveResult
from ampboard.folders.scanner import is_wordpress_root

logger = structlog.get_logger(__name__)

WP_UPLOADS = ("wp-content", "uploads")
ARCHIVE_SUFFIXES = (".zip", ".tar.gz", ".tar")

_ARCHIVE_SUFFIX_RE = re.compile(r"\.(zip|tar\.gz|tar)$", re.IGNORECASE)


@dataclass(frozen=True)
class ArchiveEntry:
    """One filesystem entry to store, addressed by its name in the archive."""

    path: Path
    arcname: str
    is_dir: bool


class ArchiveBackend(ABC):
    """An archive format writer.

    Backends are tried in order; the first available one that succeeds
    produces the archive.
    """

    name: str
    suffix: str

    @abstractmethod
    def is_available(self) -> bool:
        """Whether this backend can run on the current interpreter/system."""

    @abstractmethod
    def archive(self, entries: Iterable[ArchiveEntry], destination: Path, root: Path) -> int:
        """Write ``entries`` to ``destination`` and return how many were added."""


def _zlib_available() -> bool:
    return importlib.util.find_spec("zlib") is not None


class ZipBackend(ArchiveBackend):
    """Deflate-compressed ZIP via :mod:`zipfile`."""

    name = "zip"
    suffix = ".zip"

    def is_available(self) -> bool:
        return _zlib_available()

    def archive(self, entries: Iterable[ArchiveEntry], destination: Path, root: Path) -> int:
        added = 0
        with zipfile.ZipFile(destination, "w", zipfile.ZIP_DEFLATED, strict_timestamps=False) as zf:
            for entry in entries:
                zf.write(entry.path, entry.arcname)
                added += 1
        return added


class TarBackend(ArchiveBackend):
    """Plain or gzip-compressed tarball via :mod:`tarfile`."""

    name = "tar"
    suffix = ".tar"
    mode = "w"

    def is_available(self) -> bool:
        return True

    def archive(self, entries: Iterable[ArchiveEntry], destination: Path, root: Path) -> int:
        added = 0
        with tarfile.open(destination, self.mode) as tf:
            for entry in entries:
                tf.add(entry.path, arcname=entry.arcname, recursive=False)
                added += 1
        return added


class TarGzBackend(TarBackend):
    name = "tar.gz"
    suffix = ".tar.gz"
    mode = "w:gz"

    def is_available(self) -> bool:
        return _zlib_available()


class ExternalZipBackend(ArchiveBackend):
    """ZIP produced by the system ``zip`` binary.

    Entry names are fed on stdin (``zip -@``) from the archive root, so
    the exclusion policy is applied exactly as for the built-in backends.
    """

    name = "external-zip"
    suffix = ".zip"

    def __init__(self, binary: str = "zip") -> None:
        self._binary = binary

    def is_available(self) -> bool:
        return shutil.which(self._binary) is not None

    def archive(self, entries: Iterable[ArchiveEntry], destination: Path, root: Path) -> int:
        names = [f"{entry.arcname}/" if entry.is_dir else entry.arcname for entry in entries]
        destination = Path(destination).absolute()
        if not names:
            return 0

        try:
            result = subprocess.run(
                [shutil.which(self._binary) or self._binary, "-q", str(destination), "-@"],
                cwd=root,
                input="\n".join(names) + "\n",
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise ArchiveError(f"System zip could not be started: {e}") from e

        if result.returncode != 0 or not destination.is_file():
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            raise ArchiveError(f"System zip failed: {detail}")
        return len(names)


def default_backends(engine: ArchiveEngine | str = ArchiveEngine.BUILTIN) -> list[ArchiveBackend]:
    """Backends in preference order for the requested engine."""
    backends: list[ArchiveBackend] = [ZipBackend(), TarGzBackend(), TarBackend()]
    if ArchiveEngine(engine) == ArchiveEngine.EXTERNAL:
        backends.insert(0, ExternalZipBackend())
    return backends


def archive_path(destination: str | Path, suffix: str) -> Path:
    """Swap the archive suffix of ``destination`` for ``suffix``."""
    destination = Path(destination)
    stem = _ARCHIVE_SUFFIX_RE.sub("", destination.name)
    return destination.with_name(stem + suffix)


def normalise_exclusions(names: Iterable[str]) -> frozenset[str]:
    """Lower-case folder names for segment matching; blanks are dropped."""
    result = set()
    for name in names:
        segment = str(name).strip().replace("/", "").replace("\\", "").lower()
        if segment:
            result.add(segment)
    return frozenset(result)


class ArchiveExporter:
    """Archives project directories for download.

    Exclusion policy:
    - Excluded folder names match any path segment, case-insensitively,
      at any depth; a matching directory's whole subtree is skipped.
    - In a WordPress root, ``wp-content/uploads`` is skipped unless
      uploads are explicitly included.
    - ``only_uploads`` archives just ``wp-content/uploads`` and ignores
      the exclusion list.
    """

    def __init__(self, backends: Sequence[ArchiveBackend] | None = None) -> None:
        self._backends = list(backends) if backends is not None else default_backends()

    @property
    def backends(self) -> list[ArchiveBackend]:
        return self._backends

    def create_archive(
        self,
        source_dir: str | Path,
        dest_path: str | Path,
        exclude_folder_names: Iterable[str] = (),
        include_wp_uploads: bool = False,
        only_uploads: bool = False,
    ) -> ArchiveResult:
        """Archive ``source_dir`` to ``dest_path`` (or its .tar.gz/.tar sibling)."""
        source = Path(source_dir)
        if not source.is_dir():
            return ArchiveResult(ok=False, error="Source folder does not exist.")

        is_wp = is_wordpress_root(source)
        root = source
        excluded = normalise_exclusions(exclude_folder_names)
        skip_uploads = is_wp and not include_wp_uploads

        if only_uploads:
            uploads = source.joinpath(*WP_UPLOADS)
            if not is_wp or not uploads.is_dir():
                return ArchiveResult(ok=False, error="Uploads folder not found for this selection.")
            root = uploads
            excluded = frozenset()
            skip_uploads = False

        logger.info(
            "Creating archive",
            source=str(source),
            root=str(root),
            excluded=sorted(excluded),
            wordpress=is_wp,
            skip_uploads=skip_uploads,
        )
        return self._write(
            lambda: self.iter_entries(root, excluded, skip_uploads),
            Path(dest_path),
            root,
        )

    def create_file_archive(self, file_path: str | Path, dest_path: str | Path) -> ArchiveResult:
        """Archive a single file under its own name."""
        file_path = Path(file_path)
        if not file_path.is_file():
            return ArchiveResult(ok=False, error="Input file does not exist.")

        entry = ArchiveEntry(path=file_path, arcname=file_path.name, is_dir=False)
        return self._write(lambda: iter([entry]), Path(dest_path), file_path.parent)

    def iter_entries(
        self,
        root: Path,
        excluded: frozenset[str] = frozenset(),
        skip_uploads: bool = False,
    ) -> Iterator[ArchiveEntry]:
        """Walk ``root`` yielding entries that pass the exclusion policy.

        A directory is yielded before its contents. Symlinked directories
        are stored but not descended into.
        """
        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            rel_parts = current.relative_to(root).parts

            kept = []
            for name in sorted(dirnames):
                if name.lower() in excluded:
                    continue
                if skip_uploads and rel_parts + (name,) == WP_UPLOADS:
                    continue
                kept.append(name)
            dirnames[:] = kept

            for name in kept:
                yield ArchiveEntry(
                    path=current / name,
                    arcname="/".join(rel_parts + (name,)),
                    is_dir=True,
                )
            for name in sorted(filenames):
                if name.lower() in excluded:
                    continue
                # Only regular files, or links to them, are stored.
                if not (current / name).is_file():
                    logger.info("Skipping non-regular file", path=str(current / name))
                    continue
                yield ArchiveEntry(
                    path=current / name,
                    arcname="/".join(rel_parts + (name,)),
                    is_dir=False,
                )

    def _write(
        self,
        entries: Callable[[], Iterable[ArchiveEntry]],
        destination: Path,
        root: Path,
    ) -> ArchiveResult:
        dest_dir = destination.parent
        try:
            dest_dir.mkdir(mode=0o775, parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cannot create destination directory", dir=str(dest_dir), error=str(e))
            return ArchiveResult(ok=False, error=f"Cannot create destination directory: {dest_dir}")
        if not os.access(dest_dir, os.W_OK):
            return ArchiveResult(ok=False, error=f"Destination directory is not writable: {dest_dir}")

        available = [backend for backend in self._backends if backend.is_available()]
        if not available:
            return ArchiveResult(ok=False, error="No archive backend is available.")

        _remove_archives(destination)

        notices: list[str] = []
        error = None
        for backend in available:
            target = archive_path(destination, backend.suffix)
            try:
                added = backend.archive(entries(), target, root)
            except (OSError, ValueError, ArchiveError, zipfile.BadZipFile, tarfile.TarError) as e:
                _remove_archives(destination)
                error = f"{backend.name} error: {e}"
                logger.warning("Archive backend failed", backend=backend.name, error=str(e))
                notices.append(f"{error}. Falling back to the next archive backend.")
                continue

            if added == 0:
                _remove_archives(destination)
                return ArchiveResult(
                    ok=False,
                    backend=backend.name,
                    error="Archive was not created (no files were added).",
                )

            logger.info(
                "Archive created",
                path=str(target),
                backend=backend.name,
                entries=added,
            )
            return ArchiveResult(
                ok=True,
                path=str(target),
                file_name=target.name,
                backend=backend.name,
                entries=added,
                message=" ".join(notices) or None,
            )

        return ArchiveResult(ok=False, error=error)


def _remove_archives(destination: Path) -> None:
    """Delete every archive variant of ``destination``."""
    for suffix in ARCHIVE_SUFFIXES:
        candidate = archive_path(destination, suffix)
        try:
            candidate.unlink()
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.warning("Failed to remove archive", path=str(candidate), error=str(e))
