"""Catalog API - Field definitions available to the workspace."""

from typing import Any

from fastapi import APIRouter, Depends

from layout_builder.schemas.workspace import FieldCatalog, Node
from layout_builder.services.catalog_service import get_field_catalog
from layout_builder.services.node_service import import_catalog

router = APIRouter()


@router.get("/catalog")
async def get_catalog(catalog: FieldCatalog = Depends(get_field_catalog)) -> dict[str, Any]:
    """Get the raw field catalog."""
    return catalog


@router.get("/catalog/nodes", response_model=list[Node])
async def get_catalog_nodes(catalog: FieldCatalog = Depends(get_field_catalog)):
    """Get the catalog as workspace nodes, spacer included."""
    return import_catalog(catalog)
