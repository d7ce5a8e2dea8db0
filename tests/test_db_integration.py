from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from project_storage.data.db import Base, get_session
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

pytestmark = pytest.mark.usefixtures("temp_db")


def test_tables_created() -> None:
    assert {table.name for table in Base.metadata.sorted_tables} >= {
        "projects",
        "wikis",
        "wiki_pages",
        "work_packages",
        "attachments",
        "repositories",
    }


def test_container_attachments_are_separated_by_type() -> None:
    with get_session() as session:
        project = Project(identifier="alpha", name="Alpha")
        session.add(project)
        session.flush()
        wiki = Wiki(project_id=project.id)
        session.add(wiki)
        session.flush()
        page = WikiPage(wiki_id=wiki.id, title="Start")
        work_package = WorkPackage(project_id=project.id, subject="Task")
        session.add_all([page, work_package])
        session.flush()
        # Same numeric id on both containers
        assert page.id == work_package.id
        session.add_all(
            [
                Attachment(
                    container_type=WIKI_PAGE_CONTAINER,
                    container_id=page.id,
                    filename="diagram.png",
                    filesize=10,
                ),
                Attachment(
                    container_type=WORK_PACKAGE_CONTAINER,
                    container_id=work_package.id,
                    filename="log.txt",
                    filesize=20,
                ),
            ]
        )
        page_id = page.id
        work_package_id = work_package.id

    with get_session() as session:
        page = session.get(WikiPage, page_id)
        work_package = session.get(WorkPackage, work_package_id)
        assert [a.filename for a in page.attachments] == ["diagram.png"]
        assert [a.filename for a in work_package.attachments] == ["log.txt"]


def test_project_has_at_most_one_repository() -> None:
    with get_session() as session:
        project = Project(identifier="beta", name="Beta")
        session.add(project)
        session.flush()
        project_id = project.id
        session.add(Repository(project_id=project_id, required_storage_bytes=1))

    with pytest.raises(IntegrityError):
        with get_session() as session:
            session.add(Repository(project_id=project_id, required_storage_bytes=2))


def test_unknown_container_type_is_rejected() -> None:
    with pytest.raises(IntegrityError):
        with get_session() as session:
            session.add(Attachment(container_type="News", container_id=1, filesize=1))
