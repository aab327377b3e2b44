"""Tests for export group scanning."""

from pathlib import Path

import pytest

from ampboard.core.models.column import UrlRules
from ampboard.export.groups import list_exportable_subfolders, scan_export_groups
from ampboard.folders.scanner import FolderScanner
from tests.factories import ColumnFactory


@pytest.mark.unit
class TestScanExportGroups:
    """Tests for scan_export_groups."""

    def test_groups_keep_column_positions(self, htdocs: Path, wordpress_site: Path) -> None:
        (htdocs / "sites" / "static").mkdir()
        (htdocs / "tools" / "adminer").mkdir(parents=True)
        columns = [
            (0, ColumnFactory(title="Sites", dir="sites")),
            (1, ColumnFactory(title="", dir="tools")),
            (2, ColumnFactory(title="Tools", dir="tools")),
        ]

        groups = scan_export_groups(columns, FolderScanner(htdocs))

        assert [(group.index, group.title) for group in groups] == [(0, "Sites"), (2, "Tools")]
        blog, static = groups[0].subfolders
        assert blog.name == "blog"
        assert blog.is_wordpress_root and blog.has_uploads
        assert static.name == "static"
        assert not static.is_wordpress_root and not static.has_uploads

    def test_traversal_column_is_skipped(self, htdocs: Path) -> None:
        columns = [(0, ColumnFactory(title="Etc", dir="../etc"))]
        assert scan_export_groups(columns, FolderScanner(htdocs)) == []

    def test_missing_directory_gives_empty_group(self, htdocs: Path) -> None:
        groups = scan_export_groups([(0, ColumnFactory(dir="gone"))], FolderScanner(htdocs))
        assert groups[0].subfolders == []


@pytest.mark.unit
class TestListExportableSubfolders:
    """Tests for list_exportable_subfolders."""

    @pytest.fixture
    def base(self, htdocs: Path) -> Path:
        for name in ["wp-one", "wp-two", "laravel", "vendor"]:
            (htdocs / "p" / name).mkdir(parents=True)
        return htdocs / "p"

    def test_match_and_exclusions(self, htdocs: Path, base: Path) -> None:
        column = ColumnFactory(
            exclude_list=["wp-two"],
            url_rules=UrlRules(match="^wp-", replace="^wp-"),
        )
        names = [sub.name for sub in list_exportable_subfolders(FolderScanner(htdocs), base, column)]
        assert names == ["wp-one"]

    def test_invalid_match_does_not_filter(self, htdocs: Path, base: Path) -> None:
        column = ColumnFactory(url_rules=UrlRules(match="([", replace="x"))
        subfolders = list_exportable_subfolders(FolderScanner(htdocs), base, column)
        assert [sub.name for sub in subfolders] == ["laravel", "vendor", "wp-one", "wp-two"]
