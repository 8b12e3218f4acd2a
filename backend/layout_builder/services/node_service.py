"""Node Service - Converts between the field catalog, workspace nodes and layout documents."""

from collections.abc import Iterable, Mapping
from typing import Any

from layout_builder.schemas.workspace import (
    Container,
    FieldCatalog,
    Node,
    DEFAULT_EDITOR_TYPE,
    SPACER_ID,
    SPACER_LABEL,
)


def create_spacer_node(node_id: str = SPACER_ID) -> Node:
    """Create the clonable layout-only spacer node."""
    return Node.spacer(node_id)


def is_spacer(node: Node | Mapping[str, Any]) -> bool:
    """Identify a spacer by id or by label.

    Accepts workspace nodes as well as node-like mappings coming from
    previously stored data.
    """
    if isinstance(node, Mapping):
        return node.get("id") == SPACER_ID or node.get("label") == SPACER_LABEL
    return node.id == SPACER_ID or node.label == SPACER_LABEL


def resolve_label_text(label: Any) -> str | None:
    """Return the text of a label, unwrapping nested {"text": ...} objects.

    Older exports could wrap label.text in another {"text": ...} object on
    every save, so the value is unwrapped until it is no longer such a mapping.
    """
    text = label
    while isinstance(text, Mapping) and "text" in text:
        text = text["text"]
    if isinstance(text, str) and text:
        return text
    return None


def resolve_editor_type(editor_type: Any) -> str | None:
    """Return the editor type if it is a string, otherwise None."""
    return editor_type if isinstance(editor_type, str) else None


def import_catalog(catalog: FieldCatalog) -> list[Node]:
    """Transform the raw field catalog into workspace nodes.

    Every catalog entry becomes a node keyed by its field id, followed by a
    single spacer node.
    """
    nodes = [
        Node(
            id=field_id,
            label=resolve_label_text(definition.get("label")) or field_id,
            data_field=field_id,
            editor_type=resolve_editor_type(definition.get("editorType")),
            metadata=dict(definition),
        )
        for field_id, definition in catalog.items()
    ]
    nodes.append(create_spacer_node())
    return nodes


def export_node(node: Node, catalog: FieldCatalog) -> dict[str, Any]:
    """Export a single node as a layout item."""
    base = catalog.get(node.data_field)
    if base is None:
        base = node.metadata
    # Layout metadata (summaryType etc.) takes precedence over the catalog
    combined = {**base, **node.metadata}

    label_text = resolve_label_text(combined.pop("label", None)) or node.label

    item: dict[str, Any] = {
        "dataField": node.data_field,
        "editorType": node.editor_type or DEFAULT_EDITOR_TYPE,
        "label": {"text": label_text},
    }
    item.update(combined)
    if not resolve_editor_type(item["editorType"]):
        item["editorType"] = node.editor_type or DEFAULT_EDITOR_TYPE
    return item


def export_workspace(containers: Iterable[Container], catalog: FieldCatalog) -> list[dict[str, Any]]:
    """Transform workspace containers into the layout document format."""
    return [
        {
            "name": container.name,
            "itemType": "group",
            "colCount": container.num_col,
            "items": [
                export_node(node, catalog)
                for node in container.nodes
                if not is_spacer(node)
            ],
        }
        for container in containers
    ]
