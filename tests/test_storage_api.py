from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import project_storage.data.db as app_db
from project_storage.api.main import app
from project_storage.api.routes import storage as storage_routes
from project_storage.data.db import get_session
from project_storage.data.models import (
    WIKI_PAGE_CONTAINER,
    WORK_PACKAGE_CONTAINER,
    Attachment,
    Project,
    Repository,
    Wiki,
    WikiPage,
    WorkPackage,
)
from project_storage.models.storage import StoreUnavailableError


def _seed_project(identifier: str, wiki_size: int, work_package_size: int, repo_size: int) -> int:
    with get_session() as session:
        project = Project(identifier=identifier, name=identifier)
        session.add(project)
        session.flush()
        wiki = Wiki(project_id=project.id)
        work_package = WorkPackage(project_id=project.id, subject="Task")
        session.add_all([wiki, work_package])
        session.flush()
        page = WikiPage(wiki_id=wiki.id, title="Start")
        session.add(page)
        session.flush()
        session.add_all(
            [
                Attachment(
                    container_type=WIKI_PAGE_CONTAINER, container_id=page.id, filesize=wiki_size
                ),
                Attachment(
                    container_type=WORK_PACKAGE_CONTAINER,
                    container_id=work_package.id,
                    filesize=work_package_size,
                ),
                Repository(project_id=project.id, required_storage_bytes=repo_size),
            ]
        )
        return project.id


def test_health_check() -> None:
    client = TestClient(app)

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "ok"}


def test_health_check_reports_unreachable_database(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    missing = tmp_path / "missing" / "storage.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{missing.as_posix()}")
    app_db.reset_engine()
    client = TestClient(app)

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "degraded", "database": "unavailable"}


def test_get_project_storage() -> None:
    client = TestClient(app)
    project_id = _seed_project("alpha", wiki_size=350, work_package_size=50, repo_size=1000)

    response = client.get(f"/api/projects/{project_id}/storage")

    assert response.status_code == 200
    assert response.json() == {
        "project_id": project_id,
        "total": 1400,
        "total_human": "1.4 KB",
        "modules": {"work_packages": 50, "wiki": 350, "repository": 1000},
    }


def test_get_project_storage_omits_empty_modules() -> None:
    client = TestClient(app)
    project_id = _seed_project("beta", wiki_size=0, work_package_size=20, repo_size=0)

    response = client.get(f"/api/projects/{project_id}/storage")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 20
    assert data["modules"] == {"work_packages": 20}


def test_get_project_storage_not_found() -> None:
    client = TestClient(app)

    response = client.get("/api/projects/424242/storage")

    assert response.status_code == 404
    assert response.json()["detail"] == "Project 424242 not found"


def test_list_project_storage_and_total() -> None:
    client = TestClient(app)
    first = _seed_project("one", wiki_size=1, work_package_size=2, repo_size=3)
    second = _seed_project("two", wiki_size=10, work_package_size=20, repo_size=30)

    listing = client.get("/api/storage/projects")
    total = client.get("/api/storage/total")

    assert listing.status_code == 200
    assert [(item["project_id"], item["total"]) for item in listing.json()] == [
        (first, 6),
        (second, 60),
    ]
    assert total.status_code == 200
    assert total.json() == {"total": 66, "total_human": "66.0 B"}


def test_total_storage_without_projects() -> None:
    client = TestClient(app)

    response = client.get("/api/storage/total")

    assert response.status_code == 200
    assert response.json()["total"] == 0


def test_store_unavailable_returns_503(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(*args: object, **kwargs: object) -> None:
        raise StoreUnavailableError("connection refused")

    monkeypatch.setattr(storage_routes, "count_required_storage", _fail)
    monkeypatch.setattr(storage_routes, "total_projects_size", _fail)
    monkeypatch.setattr(storage_routes, "list_required_storage", _fail)
    client = TestClient(app)

    assert client.get("/api/projects/1/storage").status_code == 503
    assert client.get("/api/storage/projects").status_code == 503
    assert client.get("/api/storage/total").status_code == 503
