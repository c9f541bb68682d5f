"""
Shared fixtures for flow tests.

Provides:
- Sample integrations and collection descriptors
- Temporary flow store
"""

from pathlib import Path
from typing import Any

import pytest

from flowgen.core.flows.models import CollectionDescriptor, Integration
from flowgen.core.flows.store import FlowStore


@pytest.fixture
def hubspot() -> Integration:
    """HubSpot integration."""
    return Integration(id="abc", key="hubspot", name="HubSpot")


@pytest.fixture
def contacts() -> CollectionDescriptor:
    """Contacts collection with two events and no parameters schema."""
    return CollectionDescriptor(
        key="contacts",
        name="Contacts",
        events={"created": {}, "updated": {}},
    )


@pytest.fixture
def parameters_schema() -> dict[str, Any]:
    """Sample collection parameters schema."""
    return {
        "type": "object",
        "properties": {
            "listId": {"type": "string", "title": "List"},
        },
        "required": ["listId"],
    }


@pytest.fixture
def list_members(parameters_schema: dict[str, Any]) -> CollectionDescriptor:
    """Collection that requires runtime parameters."""
    return CollectionDescriptor(
        key="list-members",
        name="List Members",
        events={"created": {}},
        parameters_schema=parameters_schema,
    )


@pytest.fixture
def flow_store(tmp_path: Path) -> FlowStore:
    """Flow store rooted in a temporary directory."""
    return FlowStore(tmp_path / "dist")
