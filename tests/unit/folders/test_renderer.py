"""Tests for the folder columns renderer."""

from pathlib import Path

import pytest

from ampboard.core.models.column import UrlRules
from ampboard.folders.renderer import FoldersRenderer
from ampboard.folders.scanner import TRAVERSAL_ERROR, FolderScanner
from tests.factories import ColumnFactory, TemplateFactory


@pytest.fixture
def projects(htdocs: Path) -> Path:
    base = htdocs / "proj"
    for name in ["beta", "Alpha", "wp-press", "node_modules"]:
        (base / name).mkdir(parents=True)
    return base


@pytest.mark.unit
class TestFoldersRenderer:
    """Tests for FoldersRenderer."""

    def test_plain_column(self, htdocs: Path, projects: Path) -> None:
        (projects / "wp-press").rmdir()
        (projects / "node_modules").rmdir()
        column = ColumnFactory(dir="proj", url_rules=UrlRules(match="", replace=""))

        listing = FoldersRenderer(FolderScanner(htdocs)).render([column], {})

        assert listing.columns[0].items == ["Alpha", "beta"]
        assert listing.errors == []
        assert '<li><a href="/Alpha">Alpha</a></li>\n<li><a href="/beta">beta</a></li>' in listing.html

    def test_exclusions_rules_and_template(self, htdocs: Path, projects: Path) -> None:
        column = ColumnFactory(
            title="Sites",
            dir="proj",
            exclude_list=["node_modules"],
            url_rules=UrlRules(match="^wp-", replace="^wp-"),
            special_cases={"press": "WordPress"},
            link_template="vhost",
        )
        templates = {"vhost": TemplateFactory(name="vhost", html="<li>{urlName}.test</li>")}

        listing = FoldersRenderer(FolderScanner(htdocs)).render([column], templates)

        assert listing.columns[0].items == ["WordPress"]
        assert "<li>WordPress.test</li>" in listing.html
        assert "<h3>Sites</h3>" in listing.html

    def test_title_links_to_href(self, htdocs: Path, projects: Path) -> None:
        column = ColumnFactory(title="Tools & Co", href="http://localhost/tools", dir="proj")
        listing = FoldersRenderer(FolderScanner(htdocs)).render([column], {})
        assert '<h3><a href="http://localhost/tools">Tools &amp; Co</a></h3>' in listing.html

    def test_missing_directory_keeps_other_columns(self, htdocs: Path, projects: Path) -> None:
        broken = ColumnFactory(title="Gone", dir="gone")
        working = ColumnFactory(title="Here", dir="proj", exclude_list=["node_modules"])

        listing = FoldersRenderer(FolderScanner(htdocs)).render([broken, working], {})

        assert listing.errors == ['Directory does not exist for column "Gone": gone']
        assert listing.columns[0].error == listing.errors[0]
        assert "folders-error" in listing.columns[0].html
        assert listing.columns[1].items == ["Alpha", "beta", "wp-press"]
        assert '<div class="folders-errors">' in listing.html

    def test_traversal_column(self, htdocs: Path) -> None:
        column = ColumnFactory(dir="../../etc")
        listing = FoldersRenderer(FolderScanner(htdocs)).render([column], {})
        assert listing.errors == [TRAVERSAL_ERROR]
        assert listing.columns[0].items == []

    def test_errors_are_deduplicated(self, htdocs: Path, projects: Path) -> None:
        column = ColumnFactory(title="Half", dir="proj", url_rules=UrlRules(match="x", replace=""))
        listing = FoldersRenderer(FolderScanner(htdocs)).render([column, column], {})
        assert listing.errors == [
            'Both urlRules.match and urlRules.replace must be set (or both empty) for column "Half".'
        ]

    def test_empty_column(self, htdocs: Path) -> None:
        (htdocs / "empty").mkdir()
        listing = FoldersRenderer(FolderScanner(htdocs)).render([ColumnFactory(dir="empty")], {})
        assert "No projects found." in listing.html
        assert listing.errors == []

    def test_no_columns(self, htdocs: Path) -> None:
        listing = FoldersRenderer(FolderScanner(htdocs)).render([], {})
        assert listing.html == ""
        assert listing.columns == []
