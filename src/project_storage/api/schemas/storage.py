"""Pydantic schemas for storage API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from project_storage.models.storage import StorageReport
from project_storage.services.storage import format_bytes


class ProjectStorageResponse(BaseModel):
    """Required disk storage of a single project."""

    project_id: int
    total: int = Field(ge=0, description="Total required disk space in bytes")
    total_human: str = Field(description="Total required disk space, human readable")
    modules: dict[str, int] = Field(
        default_factory=dict,
        description="Bytes per module; modules without stored data are omitted",
    )

    @classmethod
    def from_report(cls, report: StorageReport) -> ProjectStorageResponse:
        data = report.to_dict()
        return cls(
            project_id=report.project_id,
            total=data["total"],
            total_human=format_bytes(report.total_bytes),
            modules=data["modules"],
        )


class StorageTotalResponse(BaseModel):
    """Required disk storage summed over all projects."""

    total: int = Field(ge=0, description="Total required disk space in bytes")
    total_human: str = Field(description="Total required disk space, human readable")
