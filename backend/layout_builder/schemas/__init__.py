"""Pydantic schemas for request/response validation."""

from layout_builder.schemas.workspace import (
    Node,
    NodeKind,
    Container,
    FieldCatalog,
    FieldDefinition,
    SPACER_ID,
    SPACER_LABEL,
    SPACER_DATA_FIELD,
    DEFAULT_EDITOR_TYPE,
)
from layout_builder.schemas.layout import (
    LabelText,
    ExportItem,
    ExportGroup,
    LayoutSaveRequest,
    LayoutSaveResponse,
    LayoutSummary,
    LayoutListResponse,
    LayoutDocumentResponse,
)

__all__ = [
    "Node",
    "NodeKind",
    "Container",
    "FieldCatalog",
    "FieldDefinition",
    "SPACER_ID",
    "SPACER_LABEL",
    "SPACER_DATA_FIELD",
    "DEFAULT_EDITOR_TYPE",
    "LabelText",
    "ExportItem",
    "ExportGroup",
    "LayoutSaveRequest",
    "LayoutSaveResponse",
    "LayoutSummary",
    "LayoutListResponse",
    "LayoutDocumentResponse",
]
