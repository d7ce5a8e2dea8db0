"""Storage routes for the API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Path, status

from project_storage.api.schemas.storage import ProjectStorageResponse, StorageTotalResponse
from project_storage.models.storage import ProjectNotFoundError, StoreUnavailableError
from project_storage.services.storage import (
    count_required_storage,
    format_bytes,
    list_required_storage,
    total_projects_size,
)

router = APIRouter(tags=["storage"])


def _store_unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Storage information is currently unavailable",
    )


@router.get("/projects/{project_id}/storage", response_model=ProjectStorageResponse)
def get_project_storage(
    project_id: int = Path(..., description="Project ID", ge=1),
) -> ProjectStorageResponse:
    """Get the required disk storage of a project.

    Raises:
        HTTPException: 404 if the project does not exist, 503 if the
            database cannot be queried.
    """
    try:
        report = count_required_storage(project_id)
    except ProjectNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found",
        ) from exc
    except StoreUnavailableError as exc:
        raise _store_unavailable() from exc
    return ProjectStorageResponse.from_report(report)


@router.get("/storage/projects", response_model=list[ProjectStorageResponse])
def list_project_storage() -> list[ProjectStorageResponse]:
    """List the required disk storage of every project."""
    try:
        reports = list_required_storage()
    except StoreUnavailableError as exc:
        raise _store_unavailable() from exc
    return [ProjectStorageResponse.from_report(report) for report in reports]


@router.get("/storage/total", response_model=StorageTotalResponse)
def get_total_storage() -> StorageTotalResponse:
    """Get the required disk storage summed over all projects."""
    try:
        total = total_projects_size()
    except StoreUnavailableError as exc:
        raise _store_unavailable() from exc
    return StorageTotalResponse(total=total, total_human=format_bytes(total))
