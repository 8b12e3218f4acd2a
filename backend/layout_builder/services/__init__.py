"""Business logic services."""

from layout_builder.services.catalog_service import get_field_catalog, load_catalog
from layout_builder.services.layout_client import (
    LayoutClient,
    StorageLayoutClient,
    HttpLayoutClient,
)
from layout_builder.services.storage_service import (
    LayoutStorageService,
    LayoutStorageError,
    LayoutValidationError,
    LayoutNotFoundError,
    get_storage_service,
)
from layout_builder.services.workspace_store import WorkspaceStore

__all__ = [
    "get_field_catalog",
    "load_catalog",
    "LayoutClient",
    "StorageLayoutClient",
    "HttpLayoutClient",
    "LayoutStorageService",
    "LayoutStorageError",
    "LayoutValidationError",
    "LayoutNotFoundError",
    "get_storage_service",
    "WorkspaceStore",
]
