"""ORM models package for database tables.

This package provides SQLAlchemy ORM models representing database tables:
- Project: Root of the ownership hierarchy
- Wiki / WikiPage: A project's wiki and its pages
- WorkPackage: Units of work belonging to a project
- Attachment: Stored files owned by wiki pages or work packages
- Repository: A project's version-control repository and its disk usage

All models inherit from the shared Base declarative class defined in data.db.
"""

from project_storage.data.db import Base
from project_storage.data.models.attachment import (
    CONTAINER_TYPES,
    WIKI_PAGE_CONTAINER,
    WORK_PACKAGE_CONTAINER,
    Attachment,
)
from project_storage.data.models.project import Project
from project_storage.data.models.repository import Repository
from project_storage.data.models.wiki import Wiki, WikiPage
from project_storage.data.models.work_package import WorkPackage

__all__ = [
    "Attachment",
    "Base",
    "CONTAINER_TYPES",
    "Project",
    "Repository",
    "WIKI_PAGE_CONTAINER",
    "WORK_PACKAGE_CONTAINER",
    "Wiki",
    "WikiPage",
    "WorkPackage",
]
