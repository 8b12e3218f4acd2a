"""Layout document Pydantic schemas based on specs/schemas/layout/layout_document_v1.schema.json"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class LabelText(BaseModel):
    """Label wrapper used in exported items."""

    text: str


class ExportItem(BaseModel):
    """A single field entry of an exported group; extra attributes are kept."""

    model_config = ConfigDict(extra="allow")

    dataField: str
    editorType: str
    label: LabelText


class ExportGroup(BaseModel):
    """A container as stored in a layout document."""

    name: str
    itemType: Literal["group"] = "group"
    colCount: int = Field(1, ge=1)
    items: list[ExportItem] = Field(default_factory=list)


class LayoutSaveRequest(BaseModel):
    """Request body for saving a layout."""

    layout: list[Any] = Field(..., description="Exported layout document (list of groups)")
    name: str | None = Field(None, max_length=255, description="Layout name, slugified into the filename")


class LayoutSaveResponse(BaseModel):
    """Response for a saved layout."""

    success: bool = True
    message: str = "Layout saved successfully"
    filename: str
    path: str


class LayoutSummary(BaseModel):
    """Listing entry for a stored layout file."""

    filename: str
    name: str
    size: int
    modified_at: datetime


class LayoutListResponse(BaseModel):
    """Stored layouts, most recently modified first."""

    layouts: list[LayoutSummary] = Field(default_factory=list)


class LayoutDocumentResponse(BaseModel):
    """A stored layout document; `layout` is None when nothing is stored."""

    filename: str | None = None
    layout: list[Any] | None = None
    message: str | None = None
