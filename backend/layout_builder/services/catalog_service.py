"""Catalog Service - Loads the field definitions offered to the workspace."""

import json
import logging
from functools import lru_cache
from pathlib import Path

from layout_builder.config import get_settings
from layout_builder.schemas.workspace import FieldCatalog

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "nodes.json"


@lru_cache
def load_catalog(path: str | Path = DEFAULT_CATALOG_PATH) -> FieldCatalog:
    """Load a field catalog (field id -> definition) from a JSON file."""
    file_path = Path(path)
    with open(file_path, "r", encoding="utf-8") as f:
        catalog = json.load(f)

    if not isinstance(catalog, dict):
        raise ValueError(f"Field catalog {file_path} must be a JSON object")

    logger.info(f"Loaded {len(catalog)} field definitions from {file_path}")
    return catalog


def get_field_catalog() -> FieldCatalog:
    """Get the field catalog configured for this application."""
    settings = get_settings()
    return load_catalog(settings.catalog_path or DEFAULT_CATALOG_PATH)
