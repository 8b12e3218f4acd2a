"""Workspace Store - Editable state of the layout builder."""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from layout_builder.schemas.layout import LayoutSaveResponse
from layout_builder.schemas.workspace import (
    Container,
    FieldCatalog,
    Node,
    NodeKind,
    SPACER_DATA_FIELD,
    SPACER_ID,
    SPACER_LABEL,
    new_id,
)
from layout_builder.services.layout_client import LayoutClient
from layout_builder.services.node_service import (
    export_workspace,
    import_catalog,
    resolve_editor_type,
    resolve_label_text,
)

logger = logging.getLogger(__name__)

UNTITLED_CONTAINER = "Untitled Container"
UNKNOWN_FIELD = "Unknown Field"


def _normalize_name(name: str) -> str:
    return name.strip().casefold()


def _column_count(value: Any) -> int:
    if isinstance(value, int) and value > 0:
        return value
    return 1


class WorkspaceStore:
    """Containers placed in the workspace plus the pool of unplaced nodes.

    One store is created per workspace session and handed to whatever UI
    layer drives it. Mutations are synchronous; only the two load operations
    and save suspend on the layout client.
    """

    def __init__(self, catalog: FieldCatalog, client: LayoutClient):
        self.catalog = catalog
        self.client = client

        self.workspace_containers: list[Container] = []
        self.available_nodes: list[Node] = import_catalog(catalog)
        self.is_loading = False
        self.load_error: Optional[str] = None

    def _find_container(self, container_id: str) -> Optional[Container]:
        for container in self.workspace_containers:
            if container.id == container_id:
                return container
        return None

    def reset(self) -> None:
        """Return to an empty workspace with every catalog node available."""
        self.workspace_containers = []
        self.available_nodes = import_catalog(self.catalog)

    # === Container Operations ===

    def add_container(self, name: str) -> Container:
        """Append an empty single-column container.

        Name uniqueness is not checked here; call is_container_name_unique first.
        """
        container = Container(id=new_id(), name=name, num_col=1, nodes=[])
        self.workspace_containers.append(container)
        return container

    def update_container_num_col(self, container_id: str, num_col: int) -> None:
        """Set the column count of a container, never below 1."""
        container = self._find_container(container_id)
        if container:
            container.num_col = num_col if num_col > 0 else 1

    def update_container_nodes(self, container_id: str, nodes: list[Node]) -> None:
        """Replace the nodes of a container.

        available_nodes is left untouched: the caller that moved the nodes is
        responsible for removing them from the pool.
        """
        container = self._find_container(container_id)
        if container:
            container.nodes = list(nodes)

    def remove_container(self, container_id: str) -> None:
        """Delete a container and return its field nodes to the available pool."""
        container = self._find_container(container_id)
        if container is None:
            return

        existing_data_fields = {node.data_field for node in self.available_nodes}

        # Spacers are dropped, never rescued
        for node in container.nodes:
            if node.data_field == SPACER_DATA_FIELD:
                continue
            if node.data_field not in existing_data_fields:
                self.available_nodes.append(node)
                existing_data_fields.add(node.data_field)

        self.workspace_containers.remove(container)

    def is_container_name_unique(self, name: str) -> bool:
        """Check a proposed container name, ignoring case and surrounding whitespace."""
        normalized = _normalize_name(name)
        return not any(
            _normalize_name(container.name) == normalized
            for container in self.workspace_containers
        )

    def get_layout_json(self) -> list[dict[str, Any]]:
        """Export the workspace as a layout document."""
        return export_workspace(self.workspace_containers, self.catalog)

    # === Server Layouts ===

    async def load_latest_layout(self) -> None:
        """Load the most recently saved layout, or start empty.

        Failures are logged and reset the workspace instead of propagating.
        """
        self.is_loading = True
        self.load_error = None

        try:
            layouts = await self.client.list_layouts()

            if layouts:
                await self._load_layout(layouts[0].filename)
            else:
                self.reset()
        except Exception as e:
            logger.error(f"Failed to load layouts from server: {e}")
            self.load_error = "Failed to load workspace from server"
            self.reset()
        finally:
            self.is_loading = False

    async def load_specific_layout(self, filename: str) -> None:
        """Replace the workspace with a stored layout. Errors propagate."""
        self.is_loading = True
        try:
            await self._load_layout(filename)
        finally:
            self.is_loading = False

    async def _load_layout(self, filename: str) -> None:
        try:
            document = await self.client.get_layout(filename)
            containers = self.convert_server_layout_to_containers(document.layout or [])
        except Exception as e:
            logger.error(f"Failed to load layout {filename}: {e}")
            raise

        self.workspace_containers = containers
        self.update_available_nodes()
        logger.info(f"Loaded layout {filename} with {len(containers)} containers")

    async def save_layout(self, name: Optional[str] = None) -> LayoutSaveResponse:
        """Export the workspace and store it through the layout client."""
        result = await self.client.save_layout(self.get_layout_json(), name=name)
        logger.info(f"Saved workspace as {result.filename}")
        return result

    def convert_server_layout_to_containers(self, server_layout: list[Mapping[str, Any]]) -> list[Container]:
        """Rebuild workspace containers from a stored layout document.

        Containers and nodes get fresh ids; dataField is kept verbatim since it
        is the key the layout is exported under.
        """
        return [
            Container(
                id=new_id(),
                name=group.get("name") or UNTITLED_CONTAINER,
                num_col=_column_count(group.get("colCount")),
                nodes=[self._convert_server_item(item) for item in group.get("items") or []],
            )
            for group in server_layout
        ]

    @staticmethod
    def _convert_server_item(item: Mapping[str, Any]) -> Node:
        label_text = resolve_label_text(item.get("label"))
        data_field = item.get("dataField")

        # Not the same test as node_service.is_spacer: stored items have no id
        if data_field == SPACER_DATA_FIELD or (not data_field and label_text == SPACER_LABEL):
            return Node(
                id=new_id(),
                label=SPACER_LABEL,
                data_field=SPACER_DATA_FIELD,
                editor_type=resolve_editor_type(item.get("editorType")),
                metadata=dict(item),
                kind=NodeKind.SPACER,
            )

        return Node(
            id=new_id(),
            label=label_text or data_field or UNKNOWN_FIELD,
            data_field=data_field or "",
            editor_type=resolve_editor_type(item.get("editorType")),
            metadata=dict(item),
        )

    def update_available_nodes(self) -> None:
        """Recompute the pool as every catalog node not used in a container."""
        used_data_fields = {
            node.data_field
            for container in self.workspace_containers
            for node in container.nodes
            if node.data_field != SPACER_DATA_FIELD
        }

        self.available_nodes = [
            node
            for node in import_catalog(self.catalog)
            if node.id == SPACER_ID or node.data_field not in used_data_fields
        ]
