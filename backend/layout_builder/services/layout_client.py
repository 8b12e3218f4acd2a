"""Layout Clients - Persistence boundary used by the workspace store."""

import logging
from typing import Any, Optional, Protocol
from urllib.parse import quote

import httpx

from layout_builder.config import get_settings
from layout_builder.schemas.layout import (
    LayoutDocumentResponse,
    LayoutListResponse,
    LayoutSaveResponse,
    LayoutSummary,
)
from layout_builder.services.storage_service import LayoutStorageService

logger = logging.getLogger(__name__)


class LayoutClient(Protocol):
    """Where layout documents are saved to and loaded from."""

    async def save_layout(self, layout: list[Any], name: Optional[str] = None) -> LayoutSaveResponse:
        ...

    async def list_layouts(self) -> list[LayoutSummary]:
        ...

    async def get_latest_layout(self) -> LayoutDocumentResponse:
        ...

    async def get_layout(self, filename: str) -> LayoutDocumentResponse:
        ...


class StorageLayoutClient:
    """In-process client backed directly by the storage service."""

    def __init__(self, storage: LayoutStorageService):
        self.storage = storage

    async def save_layout(self, layout: list[Any], name: Optional[str] = None) -> LayoutSaveResponse:
        return self.storage.save_layout(layout, name=name)

    async def list_layouts(self) -> list[LayoutSummary]:
        return self.storage.list_layouts()

    async def get_latest_layout(self) -> LayoutDocumentResponse:
        return self.storage.get_latest_layout()

    async def get_layout(self, filename: str) -> LayoutDocumentResponse:
        return self.storage.get_layout(filename)


class HttpLayoutClient:
    """Client for the layouts API.

    Non-2xx responses raise httpx.HTTPStatusError.
    """

    def __init__(self, base_url: str | None = None, client: httpx.AsyncClient | None = None):
        """Initialize the client.

        Args:
            base_url: API root, e.g. http://localhost:8000/api/v1. Defaults to settings.
            client: Pre-configured httpx client. When omitted, one is created and owned.
        """
        if client is None:
            client = httpx.AsyncClient(
                base_url=base_url or get_settings().api_base_url,
                headers={"Accept": "application/json"},
                timeout=30.0,
            )
            self._owns_client = True
        else:
            self._owns_client = False
        self._client = client

    async def __aenter__(self) -> "HttpLayoutClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> dict[str, Any]:
        response = await self._client.request(method, url, **kwargs)
        if response.is_error:
            logger.error(f"Layout API {method} {url} failed with HTTP {response.status_code}")
        response.raise_for_status()
        return response.json()

    async def save_layout(self, layout: list[Any], name: Optional[str] = None) -> LayoutSaveResponse:
        payload: dict[str, Any] = {"layout": layout}
        if name is not None:
            payload["name"] = name
        data = await self._request("POST", "/layouts", json=payload)
        return LayoutSaveResponse.model_validate(data)

    async def list_layouts(self) -> list[LayoutSummary]:
        data = await self._request("GET", "/layouts")
        return LayoutListResponse.model_validate(data).layouts

    async def get_latest_layout(self) -> LayoutDocumentResponse:
        data = await self._request("GET", "/layouts/latest")
        return LayoutDocumentResponse.model_validate(data)

    async def get_layout(self, filename: str) -> LayoutDocumentResponse:
        data = await self._request("GET", f"/layouts/{quote(filename, safe='')}")
        return LayoutDocumentResponse.model_validate(data)
