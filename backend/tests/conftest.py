"""Shared fixtures for the layout builder tests."""

import pytest
from fastapi.testclient import TestClient

from layout_builder.main import app
from layout_builder.services.catalog_service import get_field_catalog
from layout_builder.services.layout_client import StorageLayoutClient
from layout_builder.services.storage_service import LayoutStorageService, get_storage_service
from layout_builder.services.workspace_store import WorkspaceStore


@pytest.fixture
def catalog():
    return {
        "first_name": {"label": "First Name", "editorType": "dxTextBox", "required": "1"},
        "email": {"label": "Email", "editorType": "dxTextBox"},
        "birthdate": {"label": "Birth Date", "editorType": "dxDateBox", "format": "date"},
    }


@pytest.fixture
def storage(tmp_path):
    return LayoutStorageService(storage_dir=str(tmp_path))


@pytest.fixture
def store(catalog, storage):
    return WorkspaceStore(catalog, StorageLayoutClient(storage))


@pytest.fixture
def app_overrides(storage, catalog):
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_field_catalog] = lambda: catalog
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(app_overrides):
    with TestClient(app_overrides) as client:
        yield client
