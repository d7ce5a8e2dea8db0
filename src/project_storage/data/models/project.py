"""ORM model representing a project, the root of the storage hierarchy."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from project_storage.data.db import Base

if TYPE_CHECKING:
    from project_storage.data.models.repository import Repository
    from project_storage.data.models.wiki import Wiki
    from project_storage.data.models.work_package import WorkPackage


class Project(Base):
    """A project owning a wiki, work packages and optionally a repository."""

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    identifier: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    wiki: Mapped[Wiki | None] = relationship(
        "Wiki", back_populates="project", uselist=False, cascade="all, delete-orphan"
    )
    work_packages: Mapped[list[WorkPackage]] = relationship(
        "WorkPackage", back_populates="project", cascade="all, delete-orphan"
    )
    repository: Mapped[Repository | None] = relationship(
        "Repository", back_populates="project", uselist=False, cascade="all, delete-orphan"
    )
