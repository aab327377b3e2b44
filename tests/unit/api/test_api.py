"""Tests for the HTTP API."""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from ampboard.api.dependencies import get_export_service, get_settings_dep
from ampboard.api.main import create_app
from ampboard.services.export import ExportService


@pytest.fixture
def client(settings, fake_dumper, htdocs: Path, write_config) -> TestClient:
    (htdocs / "proj" / "Alpha").mkdir(parents=True)
    (htdocs / "proj" / "beta").mkdir()
    (htdocs / "proj" / "Alpha" / "index.php").write_text("<?php echo 'alpha';\n")
    write_config("folders", [{"title": "Projects", "dir": "proj", "urlRules": {"match": "", "replace": ""}}])

    app = create_app(settings)
    app.dependency_overrides[get_settings_dep] = lambda: settings
    app.dependency_overrides[get_export_service] = lambda: ExportService(settings, dumper=fake_dumper)
    return TestClient(app)


@pytest.mark.unit
class TestHealthAPI:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


@pytest.mark.unit
class TestFoldersAPI:
    """Tests for the folders endpoints."""

    def test_listing(self, client: TestClient) -> None:
        response = client.get("/api/v1/folders")
        assert response.status_code == 200
        data = response.json()
        assert data["columns"][0]["items"] == ["Alpha", "beta"]
        assert data["errors"] == []

    def test_html(self, client: TestClient) -> None:
        response = client.get("/api/v1/folders/html")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert '<a href="/Alpha">Alpha</a>' in response.text


@pytest.mark.unit
class TestConfigAPI:
    """Tests for the config endpoint."""

    def test_read_folders(self, client: TestClient) -> None:
        response = client.get("/api/v1/config/folders")
        assert response.status_code == 200
        assert json.loads(response.text)[0]["dir"] == "proj"

    def test_missing_document(self, client: TestClient) -> None:
        response = client.get("/api/v1/config/dock")
        assert response.status_code == 200
        assert response.text == "[]"

    def test_unknown_document(self, client: TestClient) -> None:
        assert client.get("/api/v1/config/passwords").status_code == 400


@pytest.mark.unit
class TestExportAPI:
    """Tests for the export endpoints."""

    def test_groups(self, client: TestClient) -> None:
        response = client.get("/api/v1/export/groups")
        assert response.status_code == 200
        [group] = response.json()
        assert group["index"] == 0
        assert group["subfolders"][0] == {"name": "Alpha", "isWordPress": False, "hasUploads": False}

    def test_export_folder_and_download(self, client: TestClient) -> None:
        response = client.post("/api/v1/export/folders", json={"group": 0, "folder": "Alpha"})
        data = response.json()
        assert data["ok"] is True
        assert data["href"].startswith("dist/exports/files-Alpha-")

        download = client.get("/" + data["href"])
        assert download.status_code == 200
        assert download.content[:2] == b"PK"

    def test_export_folder_error(self, client: TestClient) -> None:
        response = client.post("/api/v1/export/folders", json={"group": 0, "folder": "../etc"})
        assert response.status_code == 200
        assert response.json() == {
            "ok": False,
            "href": None,
            "name": None,
            "message": None,
            "error": "Invalid folder name.",
        }

    def test_export_folder_bad_mode(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/export/folders",
            json={"group": 0, "folder": "Alpha", "uploadsMode": "everything"},
        )
        assert response.status_code == 422

    def test_databases(self, client: TestClient) -> None:
        response = client.get("/api/v1/export/databases")
        assert response.json() == {"databases": ["shop", "blog"]}

    def test_export_database(self, client: TestClient) -> None:
        response = client.post("/api/v1/export/databases", json={"db": "shop"})
        data = response.json()
        assert data["ok"] is True
        assert data["name"].startswith("db-shop-")
        assert data["name"].endswith(".zip")


@pytest.mark.unit
class TestAppSettings:
    """Tests for settings passed to create_app."""

    def test_lifespan_uses_app_settings(self, settings, monkeypatch) -> None:
        from ampboard.api import main

        calls = []
        monkeypatch.setattr(main, "configure_logging", lambda **kwargs: calls.append(kwargs))
        settings.log_level = "DEBUG"

        with TestClient(main.create_app(settings)) as client:
            assert client.get("/health").status_code == 200

        assert calls == [{"log_level": "DEBUG", "json_logs": False}]

    def test_routes_use_app_settings(self, settings) -> None:
        settings.environment = "staging"
        client = TestClient(create_app(settings))
        assert client.get("/health").json()["environment"] == "staging"
