"""Data models for the project storage accountant."""

from __future__ import annotations

from project_storage.models.storage import (
    ProjectNotFoundError,
    StorageModule,
    StorageReport,
    StoreUnavailableError,
)

__all__ = [
    "ProjectNotFoundError",
    "StorageModule",
    "StorageReport",
    "StoreUnavailableError",
]
