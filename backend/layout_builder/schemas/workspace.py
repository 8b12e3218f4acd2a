"""Workspace Pydantic schemas: nodes and containers edited in the builder."""

import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, JsonValue, model_validator

SPACER_ID = "spacer"
SPACER_LABEL = "[ || ]"
SPACER_DATA_FIELD = "spacer"

DEFAULT_EDITOR_TYPE = "dxTextBox"

# A catalog entry: label/editorType plus arbitrary extra attributes.
FieldDefinition = dict[str, JsonValue]
FieldCatalog = dict[str, FieldDefinition]


def new_id() -> str:
    """Generate a fresh UI identifier."""
    return str(uuid.uuid4())


class NodeKind(str, Enum):
    """Node variant."""

    FIELD = "field"
    SPACER = "spacer"


class Node(BaseModel):
    """Editable unit representing one field, or the layout spacer."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    label: str
    data_field: str = Field(..., alias="dataField")
    editor_type: str | None = Field(None, alias="editorType")
    metadata: dict[str, JsonValue] = Field(default_factory=dict)
    kind: NodeKind = NodeKind.FIELD

    @model_validator(mode="before")
    @classmethod
    def _tag_spacer(cls, data: Any) -> Any:
        if isinstance(data, dict) and "kind" not in data:
            data_field = data.get("data_field", data.get("dataField"))
            if data_field == SPACER_DATA_FIELD:
                data = {**data, "kind": NodeKind.SPACER}
        return data

    @classmethod
    def spacer(cls, node_id: str = SPACER_ID) -> "Node":
        """Build the reserved spacer node."""
        return cls(
            id=node_id,
            label=SPACER_LABEL,
            data_field=SPACER_DATA_FIELD,
            metadata={},
            kind=NodeKind.SPACER,
        )


class Container(BaseModel):
    """A named, column-configured grouping of nodes."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id)
    name: str
    num_col: int = Field(1, alias="numCol")
    nodes: list[Node] = Field(default_factory=list)
