"""Service layer for project storage accounting."""

from project_storage.services.storage import (
    count_required_storage,
    format_bytes,
    list_required_storage,
    total_projects_size,
)

__all__ = [
    "count_required_storage",
    "format_bytes",
    "list_required_storage",
    "total_projects_size",
]
