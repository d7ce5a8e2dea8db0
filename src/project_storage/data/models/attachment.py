"""ORM model for stored files attached to wiki pages and work packages.

Attachments reference their owner polymorphically through the
``(container_type, container_id)`` pair rather than a foreign key, so a
single table serves every container kind.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from project_storage.data.db import Base

WIKI_PAGE_CONTAINER = "WikiPage"
WORK_PACKAGE_CONTAINER = "WorkPackage"
CONTAINER_TYPES = (WIKI_PAGE_CONTAINER, WORK_PACKAGE_CONTAINER)


class Attachment(Base):
    """A stored file owned by exactly one container.

    Attributes:
        id: Auto-incrementing primary key.
        container_type: Owning entity kind, ``WikiPage`` or ``WorkPackage``.
        container_id: Primary key of the owning entity.
        filename: Original name of the uploaded file.
        filesize: Size in bytes, or None when unknown.
        created_at: UTC timestamp of the upload.
    """

    __tablename__ = "attachments"
    __table_args__ = (
        CheckConstraint(
            "container_type IN ('WikiPage', 'WorkPackage')",
            name="ck_attachments_container_type",
        ),
        Index("ix_attachments_container", "container_type", "container_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    container_type: Mapped[str] = mapped_column(String(30), nullable=False)
    container_id: Mapped[int] = mapped_column(Integer, nullable=False)
    filename: Mapped[str] = mapped_column(String, nullable=False, default="")
    filesize: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
