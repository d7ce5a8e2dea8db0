"""Storage accountant for projects.

Computes the disk space required by a project, broken down by the modules
that store files on its behalf:

- wiki: attachments on the pages of the project's wiki
- work packages: attachments on the project's work packages
- repository: storage reported for the locally registered repository

All three aggregations are LEFT JOINed onto ``projects`` in a single
query, so one round trip serves a single project, every project, or the
installation-wide total.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation

from sqlalchemy import Select, and_, case, func, select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

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
from project_storage.models.storage import (
    ProjectNotFoundError,
    StorageReport,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)

__all__ = [
    "coerce_bytes",
    "count_required_storage",
    "format_bytes",
    "list_required_storage",
    "total_projects_size",
    "with_required_storage",
]


def coerce_bytes(value: object) -> int | None:
    """Convert an aggregate column value into an integer byte count.

    Some database drivers return SUM() results as Decimal or text. Blank
    values stay None so an absent subtotal is not confused with zero.
    Fractions are truncated. Values that cannot be read as a
    non-negative number are logged and treated as absent.

    Args:
        value: Raw value as returned by the driver.

    Returns:
        The byte count, or None if the value is absent or unusable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        size = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            size = int(Decimal(text))
        except (InvalidOperation, ValueError, OverflowError):
            logger.warning("Ignoring non-numeric storage value %r", value)
            return None
    if size < 0:
        logger.warning("Ignoring negative storage value %r", value)
        return None
    return size


def format_bytes(size: int) -> str:
    """Format bytes into human-readable string.

    Args:
        size: Size in bytes.

    Returns:
        Formatted string (e.g., "1.5 KB", "2.3 MB").
    """
    value = float(size)
    for unit in ["B", "KB", "MB", "GB"]:
        if value < 1024.0:
            return f"{value:.1f} {unit}"
        value /= 1024.0
    return f"{value:.1f} TB"


def _wiki_storage_subquery():
    return (
        select(
            Wiki.project_id.label("project_id"),
            func.sum(Attachment.filesize).label("filesize"),
        )
        .select_from(Wiki)
        .outerjoin(WikiPage, WikiPage.wiki_id == Wiki.id)
        .outerjoin(
            Attachment,
            and_(
                Attachment.container_id == WikiPage.id,
                Attachment.container_type == WIKI_PAGE_CONTAINER,
            ),
        )
        .group_by(Wiki.project_id)
        .subquery("wiki")
    )


def _work_package_storage_subquery():
    return (
        select(
            WorkPackage.project_id.label("project_id"),
            func.sum(Attachment.filesize).label("filesize"),
        )
        .select_from(WorkPackage)
        .outerjoin(
            Attachment,
            and_(
                Attachment.container_id == WorkPackage.id,
                Attachment.container_type == WORK_PACKAGE_CONTAINER,
            ),
        )
        .group_by(WorkPackage.project_id)
        .subquery("wp")
    )


def _repository_storage_subquery():
    # Grouped so a project can never be counted twice by the outer join.
    return (
        select(
            Repository.project_id.label("project_id"),
            func.sum(Repository.required_storage_bytes).label("required_storage_bytes"),
        )
        .group_by(Repository.project_id)
        .subquery("repos")
    )


def _counted_bytes(column):
    return case((column > 0, column), else_=0)


def with_required_storage() -> Select:
    """Build the per-project storage query.

    Selected columns:

    - ``project_id``
    - ``wiki_required_space``: required disk space from attachments on the wiki
    - ``work_package_required_space``: required disk space from attachments on work packages
    - ``repositories_required_space``: required disk space from a locally registered repository
    - ``required_disk_space``: total over the values above, absent or negative ones
      counted as zero

    Returns:
        A SELECT with one row per project.
    """
    wiki = _wiki_storage_subquery()
    wp = _work_package_storage_subquery()
    repos = _repository_storage_subquery()

    # Same rule as coerce_bytes: NULL and negative subtotals count as zero.
    required_disk_space = (
        _counted_bytes(wiki.c.filesize)
        + _counted_bytes(wp.c.filesize)
        + _counted_bytes(repos.c.required_storage_bytes)
    )

    return (
        select(
            Project.id.label("project_id"),
            wiki.c.filesize.label("wiki_required_space"),
            wp.c.filesize.label("work_package_required_space"),
            repos.c.required_storage_bytes.label("repositories_required_space"),
            required_disk_space.label("required_disk_space"),
        )
        .select_from(Project)
        .outerjoin(wiki, wiki.c.project_id == Project.id)
        .outerjoin(wp, wp.c.project_id == Project.id)
        .outerjoin(repos, repos.c.project_id == Project.id)
    )


def _row_to_report(row) -> StorageReport:
    return StorageReport(
        project_id=row.project_id,
        wiki_bytes=coerce_bytes(row.wiki_required_space),
        work_package_bytes=coerce_bytes(row.work_package_required_space),
        repository_bytes=coerce_bytes(row.repositories_required_space),
    )


@contextmanager
def _storage_session(session: Session | None) -> Iterator[Session]:
    """Use the caller's session, or open a new one, translating driver failures."""
    try:
        if session is not None:
            yield session
        else:
            with get_session() as own_session:
                yield own_session
    except DBAPIError as exc:
        logger.exception("Storage query failed")
        raise StoreUnavailableError(str(exc)) from exc


def count_required_storage(project_id: int, session: Session | None = None) -> StorageReport:
    """Count required disk storage for a single project.

    Args:
        project_id: Primary key of the project.
        session: Optional open session; a new one is used when omitted.

    Returns:
        StorageReport with the per-module subtotals of the project.

    Raises:
        ProjectNotFoundError: If no project has the given id.
        StoreUnavailableError: If the database query fails.
    """
    with _storage_session(session) as active:
        row = active.execute(
            with_required_storage().where(Project.id == project_id)
        ).one_or_none()

    if row is None:
        raise ProjectNotFoundError(project_id)

    report = _row_to_report(row)
    logger.debug("Project %d requires %d bytes", project_id, report.total_bytes)
    return report


def list_required_storage(session: Session | None = None) -> list[StorageReport]:
    """Count required disk storage for every project, ordered by project id.

    Raises:
        StoreUnavailableError: If the database query fails.
    """
    with _storage_session(session) as active:
        rows = active.execute(with_required_storage().order_by(Project.id)).all()
    return [_row_to_report(row) for row in rows]


def total_projects_size(session: Session | None = None) -> int:
    """Return the total required disk space for all projects in bytes.

    The per-project query is wrapped as a derived table and summed in the
    database, so the cost scales with the number of attachments rather
    than the number of projects.

    Raises:
        StoreUnavailableError: If the database query fails.
    """
    sub = with_required_storage().subquery("sub")
    with _storage_session(session) as active:
        total = active.execute(select(func.sum(sub.c.required_disk_space))).scalar()
    return coerce_bytes(total) or 0
