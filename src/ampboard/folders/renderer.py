"""Folder columns renderer."""

from collections.abc import Mapping, Sequence
from pathlib import Path

import structlog

from ampboard.core.models.column import Column
from ampboard.core.models.listing import FoldersListing, RenderedColumn
from ampboard.core.models.template import Template
from ampboard.folders.rules import RuleEngine
from ampboard.folders.scanner import FolderScanner
from ampboard.folders.templates import TemplateResolver
from ampboard.utils.html import escape

logger = structlog.get_logger(__name__)


class FoldersRenderer:
    """Renders every configured column as a list of folder links.

    For each column:
    1. Resolve its directory under the project root
    2. List the subdirectories
    3. Drop names on the exclusion list
    4. Apply the column's URL rules and special cases
    5. Render each remaining name with the column's template

    Columns are independent: a broken column renders an inline error and
    the remaining columns are still rendered. Errors from all columns are
    collected, de-duplicated and appended as one notice list.
    """

    def __init__(self, scanner: FolderScanner) -> None:
        self._scanner = scanner

    def render(
        self,
        columns: Sequence[Column],
        templates_by_name: Mapping[str, Template],
    ) -> FoldersListing:
        """Render all columns in their configured order."""
        errors: list[str] = []
        resolver = TemplateResolver(templates_by_name)
        rendered = [self._render_column(column, resolver, errors) for column in columns]

        unique_errors = list(dict.fromkeys(errors))
        parts = [column.html for column in rendered]
        if unique_errors:
            parts.append(render_error_notice(unique_errors))

        logger.debug(
            "Rendered folder columns",
            columns=len(rendered),
            errors=len(unique_errors),
        )
        return FoldersListing(html="\n".join(parts), errors=unique_errors, columns=rendered)

    def _render_column(
        self,
        column: Column,
        resolver: TemplateResolver,
        errors: list[str],
    ) -> RenderedColumn:
        resolved = self._scanner.resolve_subdirectory(column.dir)
        if not resolved.ok:
            errors.append(resolved.error)
            return self._column(column, [], _missing_directory_item(column.dir), resolved.error)

        if not Path(resolved.path).is_dir():
            error = f'Directory does not exist for column "{column.title}": {column.dir}'
            errors.append(error)
            return self._column(column, [], _missing_directory_item(column.dir), error)

        rules = RuleEngine(errors)
        excluded = set(column.exclude_list)
        template_html = resolver.resolve(column.link_template)

        items: list[str] = []
        item_html: list[str] = []
        for folder_name in self._scanner.list_subdirectories(resolved.path):
            if folder_name in excluded:
                continue
            url_name = rules.apply(folder_name, column)
            if url_name is None:
                continue
            items.append(url_name)
            item_html.append(resolver.render(template_html, url_name, column.disable_links))

        if not item_html:
            item_html.append('<li class="folders-empty">No projects found.</li>')

        return self._column(column, items, "\n".join(item_html))

    @staticmethod
    def _column(
        column: Column,
        items: list[str],
        body: str,
        error: str | None = None,
    ) -> RenderedColumn:
        title = escape(column.title)
        if column.href:
            title = f'<a href="{escape(column.href)}">{title}</a>'
        html = f'<div class="column">\n<h3>{title}</h3>\n<ul>\n{body}\n</ul>\n</div>'
        return RenderedColumn(
            title=column.title,
            href=column.href,
            dir=column.dir,
            items=items,
            html=html,
            error=error,
        )


def _missing_directory_item(directory: str) -> str:
    return (
        '<li class="folders-error">Error: The directory '
        f'&#039;{escape(directory)}&#039; does not exist.</li>'
    )


def render_error_notice(errors: Sequence[str]) -> str:
    """Render collected configuration errors as one notice list."""
    items = "\n".join(f"<li>{escape(error)}</li>" for error in errors)
    return f'<div class="folders-errors">\n<ul>\n{items}\n</ul>\n</div>'
