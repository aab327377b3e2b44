"""Pytest configuration and fixtures."""

import json
from pathlib import Path
from typing import Any, Callable, TextIO

import pytest

from ampboard.config.settings import Settings
from ampboard.core.exceptions import DatabaseConnectionError
from ampboard.repositories.config_store import CONFIG_DOCUMENTS


@pytest.fixture
def htdocs(tmp_path: Path) -> Path:
    """Project root with no projects in it."""
    root = tmp_path / "htdocs"
    root.mkdir()
    return root


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    path = tmp_path / "config"
    path.mkdir()
    return path


@pytest.fixture
def write_config(config_dir: Path) -> Callable[[str, Any], Path]:
    """Write a named config document as JSON."""

    def _write(name: str, data: Any) -> Path:
        path = config_dir / CONFIG_DOCUMENTS[name]
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(tmp_path: Path, htdocs: Path, config_dir: Path) -> Settings:
    """Settings pointing every directory into the test's tmp_path."""
    return Settings(
        _env_file=None,
        environment="development",
        htdocs_path=str(htdocs),
        config_dir=str(config_dir),
        exports_dir=str(tmp_path / "exports"),
        exports_public_path="dist/exports",
        demo_mode=False,
    )


@pytest.fixture
def wordpress_site(htdocs: Path) -> Path:
    """A WordPress install with uploads under htdocs/sites/blog."""
    site = htdocs / "sites" / "blog"
    (site / "wp-content" / "uploads" / "2024").mkdir(parents=True)
    (site / "wp-content" / "plugins").mkdir()
    (site / "wp-config.php").write_text("<?php\n")
    (site / "index.php").write_text("<?php\n")
    (site / "wp-content" / "uploads" / "2024" / "photo.jpg").write_bytes(b"\xff\xd8")
    (site / "wp-content" / "plugins" / "hello.php").write_text("<?php\n")
    return site


class FakeDumper:
    """Stands in for DatabaseDumper without a MySQL server."""

    def __init__(
        self,
        databases: list[str] | None = None,
        fail: bool = False,
    ) -> None:
        self.databases = databases or ["shop", "blog"]
        self.fail = fail
        self.dumped: list[str] = []

    def list_databases(self) -> list[str]:
        return list(self.databases)

    def dump(self, db_name: str) -> str:
        self._check()
        self.dumped.append(db_name)
        return f"-- Dump of database `{db_name}`\n"

    def dump_to(self, db_name: str, out: TextIO) -> int:
        out.write(self.dump(db_name))
        return 1

    def _check(self) -> None:
        if self.fail:
            raise DatabaseConnectionError("MySQL connect error: (2003, 'Connection refused')")


@pytest.fixture
def fake_dumper() -> FakeDumper:
    return FakeDumper()
