"""Data models for project storage reports."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ProjectNotFoundError(LookupError):
    """Raised when a project identifier does not resolve to an existing project."""

    def __init__(self, project_id: int) -> None:
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


class StoreUnavailableError(Exception):
    """Raised when the database cannot be reached or a storage query fails."""


class StorageModule(str, Enum):
    """Project modules that contribute to required disk storage."""

    WORK_PACKAGES = "work_packages"
    WIKI = "wiki"
    REPOSITORY = "repository"

    @property
    def label(self) -> str:
        return _MODULE_LABELS[self]


_MODULE_LABELS = {
    StorageModule.WORK_PACKAGES: "Work packages",
    StorageModule.WIKI: "Wiki",
    StorageModule.REPOSITORY: "Repository",
}


@dataclass(slots=True, frozen=True)
class StorageReport:
    """Disk space required by a single project.

    Subtotals are None when the project has nothing to count for that
    module (no wiki, no attachments with a known size, no repository).

    Attributes:
        project_id: Primary key of the reported project.
        wiki_bytes: Sum of attachment sizes over all wiki pages.
        work_package_bytes: Sum of attachment sizes over all work packages.
        repository_bytes: Required storage reported for the repository.
    """

    project_id: int
    wiki_bytes: int | None = None
    work_package_bytes: int | None = None
    repository_bytes: int | None = None

    @property
    def total_bytes(self) -> int:
        """Sum of all subtotals, counting absent ones as zero."""
        return sum(
            size or 0
            for size in (self.wiki_bytes, self.work_package_bytes, self.repository_bytes)
        )

    @property
    def modules(self) -> dict[StorageModule, int]:
        """Per-module breakdown holding only strictly positive subtotals."""
        values = {
            StorageModule.WORK_PACKAGES: self.work_package_bytes,
            StorageModule.WIKI: self.wiki_bytes,
            StorageModule.REPOSITORY: self.repository_bytes,
        }
        return {module: size for module, size in values.items() if size and size > 0}

    def to_dict(self) -> dict[str, object]:
        """Return the ``{"total": ..., "modules": {...}}`` form consumed by callers."""
        return {
            "total": self.total_bytes,
            "modules": {module.value: size for module, size in self.modules.items()},
        }
