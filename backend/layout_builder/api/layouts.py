"""Layouts API - Endpoints for saving and loading layout documents."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from layout_builder.schemas.layout import (
    LayoutDocumentResponse,
    LayoutListResponse,
    LayoutSaveRequest,
    LayoutSaveResponse,
)
from layout_builder.services.storage_service import (
    LayoutNotFoundError,
    LayoutStorageError,
    LayoutStorageService,
    LayoutValidationError,
    get_storage_service,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/layouts", response_model=LayoutSaveResponse)
async def save_layout(
    request: LayoutSaveRequest,
    storage: LayoutStorageService = Depends(get_storage_service),
):
    """Save layout JSON to server storage."""
    logger.info(f"Layout save requested (name={request.name!r}, groups={len(request.layout)})")

    try:
        return storage.save_layout(request.layout, name=request.name)
    except LayoutValidationError as e:
        logger.error(f"Layout validation failed: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except LayoutStorageError as e:
        logger.error(f"Failed to save layout: {e}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": f"Failed to save layout: {e}"},
        )


@router.get("/layouts", response_model=LayoutListResponse)
async def list_layouts(storage: LayoutStorageService = Depends(get_storage_service)):
    """List stored layouts, most recently modified first."""
    return LayoutListResponse(layouts=storage.list_layouts())


@router.get("/layouts/latest", response_model=LayoutDocumentResponse)
async def get_latest_layout(storage: LayoutStorageService = Depends(get_storage_service)):
    """Get the latest (most recently modified) layout."""
    try:
        return storage.get_latest_layout()
    except LayoutStorageError as e:
        logger.error(f"Failed to load latest layout: {e}")
        return JSONResponse(
            status_code=500,
            content={"layout": None, "error": f"Failed to load latest layout: {e}"},
        )


@router.get("/layouts/{filename}", response_model=LayoutDocumentResponse)
async def get_layout(
    filename: str,
    storage: LayoutStorageService = Depends(get_storage_service),
):
    """Get a stored layout by filename."""
    try:
        return storage.get_layout(filename)
    except LayoutNotFoundError:
        raise HTTPException(status_code=404, detail="Layout not found")
    except LayoutStorageError as e:
        logger.error(f"Failed to load layout {filename}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to load layout: {e}")
