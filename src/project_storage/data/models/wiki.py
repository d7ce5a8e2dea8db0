"""ORM models for a project's wiki and its pages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from project_storage.data.db import Base

if TYPE_CHECKING:
    from project_storage.data.models.attachment import Attachment
    from project_storage.data.models.project import Project


class Wiki(Base):
    """The wiki belonging to a project."""

    __tablename__ = "wikis"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    start_page: Mapped[str] = mapped_column(String, nullable=False, default="Wiki")

    project: Mapped[Project] = relationship("Project", back_populates="wiki")
    pages: Mapped[list[WikiPage]] = relationship(
        "WikiPage", back_populates="wiki", cascade="all, delete-orphan"
    )


class WikiPage(Base):
    """A single page of a wiki. Files are attached with container type ``WikiPage``."""

    __tablename__ = "wiki_pages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    wiki_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("wikis.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String, nullable=False)

    wiki: Mapped[Wiki] = relationship("Wiki", back_populates="pages")
    attachments: Mapped[list[Attachment]] = relationship(
        "Attachment",
        primaryjoin="and_(foreign(Attachment.container_id) == WikiPage.id, "
        "Attachment.container_type == 'WikiPage')",
        viewonly=True,
    )
