"""Storage Service - Persistent storage for layout documents."""

import json
import re
import unicodedata
from datetime import datetime
from pathlib import Path
from typing import Any, Optional
import logging

from layout_builder.config import get_settings
from layout_builder.schemas.layout import (
    LayoutDocumentResponse,
    LayoutSaveResponse,
    LayoutSummary,
)

logger = logging.getLogger(__name__)


class LayoutStorageError(Exception):
    """Layout could not be stored or read."""


class LayoutValidationError(LayoutStorageError):
    """Layout payload was rejected before being stored."""


class LayoutNotFoundError(LayoutStorageError):
    """Requested layout file does not exist."""


def slugify(value: str, separator: str = "-") -> str:
    """Make a name safe for use as a filename."""
    value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    value = value.replace("@", f"{separator}at{separator}")
    value = re.sub(r"[^a-z0-9]+", separator, value.lower())
    return value.strip(separator)


class LayoutStorageService:
    """Stores each layout document as a JSON file in the layouts directory."""

    def __init__(self, storage_dir: str = None):
        """Initialize storage service.

        Args:
            storage_dir: Directory for storing data. Defaults to the configured storage path.
        """
        if storage_dir is None:
            storage_dir = get_settings().storage_path

        self.storage_dir = Path(storage_dir)
        self.layouts_dir = self.storage_dir / "layouts"

        # Ensure directories exist
        self.layouts_dir.mkdir(parents=True, exist_ok=True)

    def _resolve(self, filename: str) -> Path:
        """Map a stored filename to its path, refusing anything outside the layouts directory."""
        if not filename.endswith(".json"):
            filename = f"{filename}.json"
        if Path(filename).name != filename:
            raise LayoutNotFoundError(f"Layout not found: {filename}")

        file_path = self.layouts_dir / filename
        if not file_path.is_file():
            raise LayoutNotFoundError(f"Layout not found: {filename}")
        return file_path

    def _read(self, file_path: Path) -> list[Any]:
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                layout = json.load(f)
        except json.JSONDecodeError as e:
            raise LayoutStorageError(f"Invalid JSON in layout file {file_path.name}: {e}") from e
        except OSError as e:
            raise LayoutStorageError(f"Failed to read layout file {file_path.name}: {e}") from e

        if not isinstance(layout, list):
            raise LayoutStorageError(f"Layout file {file_path.name} does not contain an array")
        return layout

    # === Layout Operations ===

    def save_layout(self, layout: Any, name: Optional[str] = None) -> LayoutSaveResponse:
        """Save a layout document under a slugified name."""
        if not isinstance(layout, list):
            raise LayoutValidationError("The layout field must be an array.")

        if name is None:
            name = f"layout_{datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}"

        filename = f"{slugify(name) or 'layout'}.json"
        file_path = self.layouts_dir / filename

        logger.info(f"Processing layout {name!r} with {len(layout)} groups")

        try:
            content = json.dumps(layout, ensure_ascii=False, indent=4)
        except (TypeError, ValueError) as e:
            raise LayoutStorageError(f"Failed to encode layout data to JSON: {e}") from e

        try:
            self.layouts_dir.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise LayoutStorageError(f"Failed to save layout file to storage: {e}") from e

        logger.info(f"Saved layout to {file_path} ({len(content)} bytes)")

        return LayoutSaveResponse(
            filename=filename,
            path=str(file_path.absolute()),
        )

    def list_layouts(self) -> list[LayoutSummary]:
        """List stored layouts, most recently modified first."""
        items = []
        for file_path in self.layouts_dir.glob("*.json"):
            stat = file_path.stat()
            items.append(LayoutSummary(
                filename=file_path.name,
                name=file_path.stem,
                size=stat.st_size,
                modified_at=datetime.fromtimestamp(stat.st_mtime),
            ))
        items.sort(key=lambda x: x.filename)
        items.sort(key=lambda x: x.modified_at, reverse=True)
        return items

    def get_latest_layout(self) -> LayoutDocumentResponse:
        """Get the most recently modified layout."""
        layouts = self.list_layouts()
        if not layouts:
            return LayoutDocumentResponse(layout=None, message="No saved layouts found")

        latest = layouts[0]
        return LayoutDocumentResponse(
            filename=latest.filename,
            layout=self._read(self.layouts_dir / latest.filename),
        )

    def get_layout(self, filename: str) -> LayoutDocumentResponse:
        """Get a stored layout by filename."""
        file_path = self._resolve(filename)
        return LayoutDocumentResponse(
            filename=file_path.name,
            layout=self._read(file_path),
        )


# Singleton instance
_storage_service: Optional[LayoutStorageService] = None


def get_storage_service() -> LayoutStorageService:
    """Get the storage service singleton."""
    global _storage_service
    if _storage_service is None:
        _storage_service = LayoutStorageService()
    return _storage_service
