"""Export group scanning."""

from collections.abc import Iterable
from pathlib import Path

import structlog

from ampboard.core.models.column import Column
from ampboard.core.models.export import ExportGroup, Subfolder
from ampboard.folders.rules import compile_rule_pattern
from ampboard.folders.scanner import FolderScanner, has_wordpress_uploads, is_wordpress_root

logger = structlog.get_logger(__name__)


def scan_export_groups(
    columns: Iterable[tuple[int, Column]],
    scanner: FolderScanner,
) -> list[ExportGroup]:
    """Describe every exportable folder, grouped by configured column.

    ``columns`` pairs each column with its position in folders.json; that
    position identifies the group in export requests. Columns without a
    title or directory are not exportable.
    """
    groups = []
    for index, column in columns:
        if not column.dir or not column.title:
            continue

        resolved = scanner.resolve_subdirectory(column.dir)
        if not resolved.ok:
            logger.warning("Skipping export group", title=column.title, error=resolved.error)
            continue

        groups.append(
            ExportGroup(
                index=index,
                title=column.title,
                dir=column.dir,
                subfolders=list_exportable_subfolders(scanner, Path(resolved.path), column),
            )
        )
    return groups


def list_exportable_subfolders(
    scanner: FolderScanner,
    base_dir: Path,
    column: Column,
) -> list[Subfolder]:
    """List a column's subfolders that pass its exclusion list and match rule."""
    pattern = None
    match = column.url_rules.match.strip() if column.url_rules else ""
    if match:
        compiled = compile_rule_pattern(match)
        if compiled.ok:
            pattern = compiled.pattern
        else:
            logger.warning("Ignoring invalid match pattern", title=column.title, error=compiled.error)

    excluded = set(column.exclude_list)
    subfolders = []
    for name in scanner.list_subdirectories(base_dir):
        if name in excluded:
            continue
        if pattern is not None and not pattern.search(name):
            continue

        path = base_dir / name
        is_wp = is_wordpress_root(path)
        subfolders.append(
            Subfolder(
                name=name,
                is_wordpress_root=is_wp,
                has_uploads=is_wp and has_wordpress_uploads(path),
            )
        )
    return subfolders
