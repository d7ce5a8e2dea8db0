"""ORM model for a project's version-control repository."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from project_storage.data.db import Base

if TYPE_CHECKING:
    from project_storage.data.models.project import Project


class Repository(Base):
    """A locally registered repository.

    Attributes:
        id: Auto-incrementing primary key.
        project_id: Foreign key to the owning Project (at most one per project).
        url: Location of the repository.
        required_storage_bytes: Disk usage maintained by the repository
            scanner, or None when it has not been measured yet.
        storage_updated_at: When ``required_storage_bytes`` was last refreshed.
    """

    __tablename__ = "repositories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    url: Mapped[str] = mapped_column(String, nullable=False, default="")
    required_storage_bytes: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    storage_updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    project: Mapped[Project] = relationship("Project", back_populates="repository")
