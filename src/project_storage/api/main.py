"""FastAPI application entry point for the project storage API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from project_storage.api.routes import health, storage

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize resources on startup and clean up on shutdown."""
    from project_storage.data.db import init_db

    init_db()
    yield


app = FastAPI(
    title="Project Storage API",
    description="Disk storage required by projects, per module and in total",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(storage.router, prefix="/api")


def main() -> None:
    """Start the development server."""
    import uvicorn

    uvicorn.run(
        "project_storage.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
