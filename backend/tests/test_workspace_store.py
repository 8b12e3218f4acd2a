"""Tests for the workspace store."""

import os
from unittest.mock import AsyncMock

import pytest

from layout_builder.schemas.layout import LayoutDocumentResponse
from layout_builder.schemas.workspace import Node, NodeKind
from layout_builder.services.node_service import create_spacer_node
from layout_builder.services.storage_service import LayoutNotFoundError
from layout_builder.services.workspace_store import WorkspaceStore


def _field(node_id, data_field=None, label=None):
    return Node(id=node_id, label=label or node_id, data_field=data_field or node_id)


class TestInitialState:
    def test_starts_empty_with_all_catalog_nodes(self, store):
        assert store.workspace_containers == []
        assert [n.id for n in store.available_nodes] == ["first_name", "email", "birthdate", "spacer"]
        assert store.is_loading is False
        assert store.load_error is None


class TestContainers:
    def test_add_container(self, store):
        container = store.add_container("Test Container")

        assert store.workspace_containers == [container]
        assert container.name == "Test Container"
        assert container.num_col == 1
        assert container.nodes == []
        assert container.id

    def test_add_container_generates_unique_ids(self, store):
        a = store.add_container("A")
        b = store.add_container("B")

        assert a.id != b.id

    def test_add_container_does_not_check_names(self, store):
        store.add_container("Same")
        store.add_container("Same")

        assert len(store.workspace_containers) == 2

    def test_update_num_col(self, store):
        container = store.add_container("Test")

        store.update_container_num_col(container.id, 3)

        assert container.num_col == 3

    @pytest.mark.parametrize("value", [0, -5])
    def test_update_num_col_clamps_to_one(self, store, value):
        container = store.add_container("Test")
        store.update_container_num_col(container.id, 4)

        store.update_container_num_col(container.id, value)

        assert container.num_col == 1

    def test_update_num_col_unknown_container(self, store):
        container = store.add_container("Test")
        before = [c.model_copy(deep=True) for c in store.workspace_containers]

        store.update_container_num_col("non-existent-id", 5)

        assert container.num_col == 1
        assert store.workspace_containers == before

    def test_update_nodes_replaces_list(self, store):
        container = store.add_container("Test")
        nodes = [_field("field1", "test_field", "Test Field")]

        store.update_container_nodes(container.id, nodes)

        assert container.nodes == nodes

    def test_update_nodes_does_not_touch_available_nodes(self, store):
        container = store.add_container("Test")
        available = list(store.available_nodes)

        store.update_container_nodes(container.id, [store.available_nodes[0]])

        assert store.available_nodes == available

    def test_update_nodes_unknown_container(self, store):
        container = store.add_container("Test")

        store.update_container_nodes("non-existent-id", [_field("x")])

        assert container.nodes == []


class TestRemoveContainer:
    def test_returns_nodes_and_drops_spacers(self, store):
        container = store.add_container("Cleanup Panel")
        standard = _field("test-1", label="Input Field")
        spacer = Node(id="test-spacer", label="[ || ]", data_field="spacer")
        store.update_container_nodes(container.id, [standard, spacer])
        initial_count = len(store.available_nodes)

        store.remove_container(container.id)

        assert store.workspace_containers == []
        assert len(store.available_nodes) == initial_count + 1
        assert standard in store.available_nodes
        assert not any(n.id == "test-spacer" for n in store.available_nodes)

    def test_does_not_duplicate_available_data_fields(self, store):
        container = store.add_container("Test")
        store.update_container_nodes(container.id, [_field("copy-of-email", "email", "Email")])
        initial_count = len(store.available_nodes)

        store.remove_container(container.id)

        assert len(store.available_nodes) == initial_count
        assert [n.data_field for n in store.available_nodes].count("email") == 1

    def test_does_not_duplicate_within_container(self, store):
        container = store.add_container("Test")
        store.update_container_nodes(container.id, [_field("a", "new"), _field("b", "new")])
        initial_count = len(store.available_nodes)

        store.remove_container(container.id)

        assert len(store.available_nodes) == initial_count + 1

    def test_spacer_only_container(self, store):
        container = store.add_container("Test")
        store.update_container_nodes(container.id, [create_spacer_node()])
        initial_count = len(store.available_nodes)

        store.remove_container(container.id)

        assert len(store.available_nodes) == initial_count

    def test_unknown_container(self, store):
        store.add_container("Test")

        store.remove_container("non-existent-id")

        assert len(store.workspace_containers) == 1


class TestContainerNames:
    def test_unique_name(self, store):
        store.add_container("Existing Container")

        assert store.is_container_name_unique("New Container") is True

    def test_duplicate_name(self, store):
        store.add_container("Existing Container")

        assert store.is_container_name_unique("Existing Container") is False

    def test_case_insensitive(self, store):
        store.add_container("Existing Container")

        assert store.is_container_name_unique("EXISTING CONTAINER") is False
        assert store.is_container_name_unique("existing container") is False

    def test_trims_whitespace(self, store):
        store.add_container("Existing")

        assert store.is_container_name_unique("  EXISTING  ") is False

    def test_trims_existing_names(self, store):
        store.add_container("  Padded ")

        assert store.is_container_name_unique("padded") is False


class TestLayoutJson:
    def test_empty_container(self, store):
        store.add_container("Test Container")

        assert store.get_layout_json() == [
            {"name": "Test Container", "itemType": "group", "colCount": 1, "items": []}
        ]


class TestConvertServerLayout:
    def test_defaults(self, store):
        containers = store.convert_server_layout_to_containers([{"items": [{"dataField": "email"}]}, {}])

        assert containers[0].name == "Untitled Container"
        assert containers[0].num_col == 1
        assert containers[0].nodes[0].label == "email"
        assert containers[1].nodes == []

    @pytest.mark.parametrize("col_count", [-3, 0, None, "2"])
    def test_invalid_col_count_clamps_to_one(self, store, col_count):
        containers = store.convert_server_layout_to_containers([{"name": "A", "colCount": col_count, "items": []}])

        assert containers[0].num_col == 1

    def test_negative_col_count_exports_valid_group(self, store):
        store.workspace_containers = store.convert_server_layout_to_containers(
            [{"name": "A", "colCount": -3, "items": []}]
        )

        assert store.get_layout_json()[0]["colCount"] == 1

    def test_non_string_editor_type_is_dropped(self, store):
        node = store.convert_server_layout_to_containers(
            [{"items": [{"dataField": "email", "editorType": 3}]}]
        )[0].nodes[0]

        assert node.editor_type is None
        assert node.metadata["editorType"] == 3

    def test_fresh_ids(self, store):
        layout = [{"name": "A", "items": [{"dataField": "email", "label": {"text": "Email"}}]}]

        first = store.convert_server_layout_to_containers(layout)
        second = store.convert_server_layout_to_containers(layout)

        assert first[0].id != second[0].id
        assert first[0].nodes[0].id != second[0].nodes[0].id
        assert first[0].nodes[0].id != "email"

    def test_spacer_by_data_field(self, store):
        item = {"dataField": "spacer", "label": {"text": "whatever"}, "editorType": "dxEmpty"}

        node = store.convert_server_layout_to_containers([{"items": [item]}])[0].nodes[0]

        assert node.kind is NodeKind.SPACER
        assert node.label == "[ || ]"
        assert node.data_field == "spacer"
        assert node.editor_type == "dxEmpty"
        assert node.metadata == item

    def test_spacer_by_label_without_data_field(self, store):
        node = store.convert_server_layout_to_containers(
            [{"items": [{"label": {"text": "[ || ]"}}]}]
        )[0].nodes[0]

        assert node.kind is NodeKind.SPACER
        assert node.data_field == "spacer"

    def test_spacer_label_with_data_field_is_a_field(self, store):
        node = store.convert_server_layout_to_containers(
            [{"items": [{"dataField": "email", "label": {"text": "[ || ]"}}]}]
        )[0].nodes[0]

        assert node.kind is NodeKind.FIELD
        assert node.data_field == "email"

    def test_unknown_field_label(self, store):
        node = store.convert_server_layout_to_containers([{"items": [{"label": {"text": ""}}]}])[0].nodes[0]

        assert node.label == "Unknown Field"


class TestUpdateAvailableNodes:
    def test_excludes_used_fields_and_keeps_spacer(self, store):
        container = store.add_container("Test")
        store.update_container_nodes(container.id, [_field("uuid-1", "email"), create_spacer_node("spacer-copy")])

        store.update_available_nodes()

        assert [n.id for n in store.available_nodes] == ["first_name", "birthdate", "spacer"]


class TestLoadLayouts:
    @pytest.mark.asyncio
    async def test_load_latest_without_layouts_resets(self, store):
        store.add_container("Stale")

        await store.load_latest_layout()

        assert store.workspace_containers == []
        assert len(store.available_nodes) == 4
        assert store.load_error is None
        assert store.is_loading is False

    @pytest.mark.asyncio
    async def test_load_latest_picks_most_recent(self, store, storage):
        storage.save_layout([{"name": "Old", "itemType": "group", "colCount": 1, "items": []}], name="old")
        storage.save_layout([
            {
                "name": "New",
                "itemType": "group",
                "colCount": 2,
                "items": [{"dataField": "email", "editorType": "dxTextBox", "label": {"text": "Email"}}],
            }
        ], name="new")
        # force a clear ordering regardless of filesystem timestamp resolution
        old_path = storage.layouts_dir / "old.json"
        stat = old_path.stat()
        os.utime(old_path, (stat.st_atime, stat.st_mtime - 60))

        await store.load_latest_layout()

        assert [c.name for c in store.workspace_containers] == ["New"]
        assert store.workspace_containers[0].num_col == 2
        assert [n.data_field for n in store.available_nodes] == ["first_name", "birthdate", "spacer"]

    @pytest.mark.asyncio
    async def test_load_latest_failure_falls_back(self, catalog):
        client = AsyncMock()
        client.list_layouts.side_effect = ConnectionError("server down")
        store = WorkspaceStore(catalog, client)
        store.add_container("Stale")
        store.available_nodes = []

        await store.load_latest_layout()

        assert store.workspace_containers == []
        assert len(store.available_nodes) == 4
        assert store.load_error == "Failed to load workspace from server"
        assert store.is_loading is False

    @pytest.mark.asyncio
    async def test_load_latest_clears_previous_error(self, store):
        store.load_error = "Failed to load workspace from server"

        await store.load_latest_layout()

        assert store.load_error is None

    @pytest.mark.asyncio
    async def test_load_specific_propagates_and_keeps_state(self, store):
        container = store.add_container("Keep Me")

        with pytest.raises(LayoutNotFoundError):
            await store.load_specific_layout("missing.json")

        assert store.workspace_containers == [container]
        assert store.is_loading is False

    @pytest.mark.asyncio
    async def test_load_specific_malformed_document_keeps_state(self, catalog):
        client = AsyncMock()
        client.get_layout.return_value = LayoutDocumentResponse(filename="bad.json", layout=["not a group"])
        store = WorkspaceStore(catalog, client)
        container = store.add_container("Keep Me")

        with pytest.raises(AttributeError):
            await store.load_specific_layout("bad.json")

        assert store.workspace_containers == [container]

    @pytest.mark.asyncio
    async def test_save_then_load_round_trip(self, store, catalog):
        container = store.add_container("Personal Info")
        store.update_container_num_col(container.id, 2)
        first_name, email = store.available_nodes[0], store.available_nodes[1]
        store.update_container_nodes(container.id, [first_name, create_spacer_node("s1"), email])
        store.available_nodes = store.available_nodes[2:]
        exported = store.get_layout_json()

        result = await store.save_layout("Personal Info")
        reloaded = WorkspaceStore(catalog, store.client)
        await reloaded.load_specific_layout(result.filename)

        assert result.filename == "personal-info.json"
        assert reloaded.get_layout_json() == exported
        assert [n.id for n in reloaded.available_nodes] == ["birthdate", "spacer"]
