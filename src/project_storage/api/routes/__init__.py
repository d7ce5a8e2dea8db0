"""Route handlers for the API."""

from project_storage.api.routes import health, storage

__all__ = ["health", "storage"]
