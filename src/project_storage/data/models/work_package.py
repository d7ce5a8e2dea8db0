"""ORM model for work packages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from project_storage.data.db import Base

if TYPE_CHECKING:
    from project_storage.data.models.attachment import Attachment
    from project_storage.data.models.project import Project


class WorkPackage(Base):
    """A unit of work within a project. Files are attached with container type ``WorkPackage``."""

    __tablename__ = "work_packages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    subject: Mapped[str] = mapped_column(String, nullable=False)

    project: Mapped[Project] = relationship("Project", back_populates="work_packages")
    attachments: Mapped[list[Attachment]] = relationship(
        "Attachment",
        primaryjoin="and_(foreign(Attachment.container_id) == WorkPackage.id, "
        "Attachment.container_type == 'WorkPackage')",
        viewonly=True,
    )
