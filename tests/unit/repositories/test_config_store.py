"""Tests for the JSON configuration store."""

from pathlib import Path

import pytest

from ampboard.repositories.config_store import ConfigStore


@pytest.mark.unit
class TestConfigStore:
    """Tests for ConfigStore."""

    def test_missing_files_read_as_empty(self, config_dir: Path) -> None:
        store = ConfigStore(config_dir)
        assert store.load_columns() == []
        assert store.load_templates() == []
        assert store.load_dock_items() == []

    def test_load_columns_with_aliases(self, config_dir: Path, write_config) -> None:
        write_config(
            "folders",
            [
                {
                    "title": "Sites",
                    "dir": "sites",
                    "excludeList": ["vendor", "vendor", " "],
                    "urlRules": {"match": "^wp-", "replace": "^wp-"},
                    "linkTemplate": "",
                    "disableLinks": "on",
                    "specialCases": {"press": "WordPress"},
                }
            ],
        )
        [column] = ConfigStore(config_dir).load_columns()
        assert column.title == "Sites"
        assert column.exclude_list == ["vendor"]
        assert column.url_rules.match == "^wp-"
        assert column.link_template == "basic"
        assert column.disable_links is True
        assert column.special_cases == {"press": "WordPress"}

    def test_invalid_json(self, config_dir: Path) -> None:
        (config_dir / "folders.json").write_text("{not json", encoding="utf-8")
        assert ConfigStore(config_dir).load_columns() == []

    def test_blank_file(self, config_dir: Path) -> None:
        (config_dir / "folders.json").write_text("  \n", encoding="utf-8")
        assert ConfigStore(config_dir).read_records("folders") == []

    def test_object_root_reads_values(self, config_dir: Path, write_config) -> None:
        write_config("dock", {"0": {"label": "phpMyAdmin", "url": "/phpmyadmin"}})
        [item] = ConfigStore(config_dir).load_dock_items()
        assert item.label == "phpMyAdmin"

    def test_scalar_root(self, config_dir: Path, write_config) -> None:
        write_config("dock", "nope")
        assert ConfigStore(config_dir).read_records("dock") == []

    def test_indexed_columns_keep_file_positions(self, config_dir: Path, write_config) -> None:
        write_config(
            "folders",
            [
                {"title": "First", "dir": "a"},
                "not a record",
                {"title": "Third", "dir": "c"},
            ],
        )
        indexed = ConfigStore(config_dir).load_indexed_columns()
        assert [(position, column.title) for position, column in indexed] == [
            (0, "First"),
            (2, "Third"),
        ]

    def test_invalid_records_are_skipped(self, config_dir: Path, write_config) -> None:
        write_config(
            "link_templates",
            [
                {"html": "<li>no name</li>"},
                {"name": "basic", "html": "<li>{urlName}</li>"},
            ],
        )
        templates = ConfigStore(config_dir).load_templates()
        assert [template.name for template in templates] == ["basic"]

    def test_templates_by_name(self, config_dir: Path, write_config) -> None:
        write_config(
            "link_templates",
            [
                {"name": "basic", "html": "<li>one</li>"},
                {"name": "basic", "html": "<li>two</li>"},
            ],
        )
        assert ConfigStore(config_dir).templates_by_name()["basic"].html == "<li>two</li>"

    def test_read_raw(self, config_dir: Path, write_config) -> None:
        store = ConfigStore(config_dir)
        assert store.read_raw("dock") == "[]"
        path = write_config("dock", [{"label": "Mail"}])
        assert store.read_raw("dock") == path.read_text(encoding="utf-8")

    def test_unknown_document(self, config_dir: Path) -> None:
        with pytest.raises(KeyError):
            ConfigStore(config_dir).path_for("secrets")
