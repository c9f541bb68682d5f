"""
Tests for flow template generation.

Covers key derivation, document shape, the parameters schema
conditional, node linkage, and determinism.
"""

import copy
from typing import Any

import pytest

from flowgen.core.flows.models import CollectionDescriptor, Integration
from flowgen.core.flows.store import render_flow_yaml
from flowgen.core.flows.template import (
    FORWARD_NODE_KEY,
    TRIGGER_NODE_KEY,
    flow_key,
    generate_flow,
)


class TestGenerateFlow:
    """Tests for generate_flow() without a parameters schema."""

    def test_key_and_name(self, hubspot: Integration, contacts: CollectionDescriptor) -> None:
        """Key and name are derived from the inputs."""
        doc = generate_flow("created", contacts, hubspot)

        assert doc.key == "created-contacts-hubspot"
        assert doc.name == "created Contacts"
        assert doc.integration_id == "abc"

    def test_flow_key_helper(self) -> None:
        """flow_key() joins event, collection and integration keys."""
        assert flow_key("deleted", "deals", "pipedrive") == "deleted-deals-pipedrive"

    def test_trigger_node(self, hubspot: Integration, contacts: CollectionDescriptor) -> None:
        """Trigger node listens for the collection event."""
        trigger = generate_flow("updated", contacts, hubspot).nodes[TRIGGER_NODE_KEY]

        assert trigger["type"] == "data-record-updated-trigger"
        assert trigger["name"] == "updated: Contacts"
        assert trigger["config"] == {"dataSource": {"collectionKey": "contacts"}}
        assert trigger["links"] == [{"key": FORWARD_NODE_KEY}]

    def test_forward_node(self, hubspot: Integration, contacts: CollectionDescriptor) -> None:
        """Forwarding node POSTs the event to /events."""
        forward = generate_flow("created", contacts, hubspot).nodes[FORWARD_NODE_KEY]

        assert forward["type"] == FORWARD_NODE_KEY
        assert forward["name"] == "Send event to API"
        request = forward["config"]["request"]
        assert request["uri"] == "/events"
        assert request["method"] == "POST"
        assert request["body"] == {
            "integrationKey": {"$var": "$.integration.key"},
            "connectionId": {"$var": "$.connection.id"},
            "instanceKey": {"$var": "$.flowInstance.instanceKey"},
            "triggerType": "created",
            "data": {"$var": "$.input.trigger"},
        }

    def test_exactly_two_nodes(self, hubspot: Integration, contacts: CollectionDescriptor) -> None:
        """The node graph holds the trigger and the forwarding node."""
        doc = generate_flow("created", contacts, hubspot)
        assert list(doc.nodes) == [TRIGGER_NODE_KEY, FORWARD_NODE_KEY]

    def test_no_parameters_anywhere(
        self, hubspot: Integration, contacts: CollectionDescriptor
    ) -> None:
        """Without a schema none of the three parameter insertions appear."""
        doc = generate_flow("created", contacts, hubspot)
        payload = doc.to_payload()

        assert "parametersSchema" not in payload
        data_source = doc.nodes[TRIGGER_NODE_KEY]["config"]["dataSource"]
        assert "collectionParameters" not in data_source
        body = doc.nodes[FORWARD_NODE_KEY]["config"]["request"]["body"]
        assert "parameters" not in body
        assert "parametersSchema" not in render_flow_yaml(doc)


class TestParametersSchema:
    """Tests for collections with a parameters schema."""

    def test_all_three_insertions(
        self,
        hubspot: Integration,
        list_members: CollectionDescriptor,
        parameters_schema: dict[str, Any],
    ) -> None:
        """Schema, collectionParameters and parameters all appear."""
        doc = generate_flow("created", list_members, hubspot)

        assert doc.to_payload()["parametersSchema"] == parameters_schema
        data_source = doc.nodes[TRIGGER_NODE_KEY]["config"]["dataSource"]
        assert data_source == {
            "collectionKey": "list-members",
            "collectionParameters": {"$var": "$.flowInstance.parameters"},
        }
        body = doc.nodes[FORWARD_NODE_KEY]["config"]["request"]["body"]
        assert body["parameters"] == {"$var": "$.flowInstance.parameters"}

    def test_schema_copied_unchanged(
        self,
        hubspot: Integration,
        list_members: CollectionDescriptor,
        parameters_schema: dict[str, Any],
    ) -> None:
        """The schema value is carried over verbatim and the input is not mutated."""
        before = copy.deepcopy(list_members.parameters_schema)
        doc = generate_flow("created", list_members, hubspot)

        assert doc.parameters_schema == parameters_schema
        assert list_members.parameters_schema == before

    def test_empty_schema_counts_as_present(self, hubspot: Integration) -> None:
        """An empty schema object still switches on parameter bindings."""
        collection = CollectionDescriptor(
            key="tasks", name="Tasks", events={"created": {}}, parameters_schema={}
        )
        doc = generate_flow("created", collection, hubspot)

        assert doc.to_payload()["parametersSchema"] == {}
        body = doc.nodes[FORWARD_NODE_KEY]["config"]["request"]["body"]
        assert "parameters" in body


class TestInvariants:
    """Structural invariants of every generated document."""

    @pytest.mark.parametrize("event_type", ["created", "updated", "deleted"])
    def test_trigger_links_to_forward_node(
        self,
        event_type: str,
        hubspot: Integration,
        contacts: CollectionDescriptor,
        list_members: CollectionDescriptor,
    ) -> None:
        """The trigger's single link target is the forwarding node's key."""
        for collection in (contacts, list_members):
            doc = generate_flow(event_type, collection, hubspot)
            links = doc.nodes[TRIGGER_NODE_KEY]["links"]

            assert len(links) == 1
            target = links[0]["key"]
            assert target in doc.nodes
            assert doc.nodes[target]["type"] == target

    def test_deterministic(self, hubspot: Integration, list_members: CollectionDescriptor) -> None:
        """Identical inputs render to byte-identical YAML."""
        first = render_flow_yaml(generate_flow("created", list_members, hubspot))
        second = render_flow_yaml(generate_flow("created", list_members, hubspot))
        assert first == second

    def test_documents_do_not_share_state(
        self, hubspot: Integration, contacts: CollectionDescriptor
    ) -> None:
        """Mutating one document leaves the next generation untouched."""
        doc = generate_flow("created", contacts, hubspot)
        doc.nodes[TRIGGER_NODE_KEY]["links"].append({"key": "other"})

        fresh = generate_flow("created", contacts, hubspot)
        assert fresh.nodes[TRIGGER_NODE_KEY]["links"] == [{"key": FORWARD_NODE_KEY}]


class TestPreconditions:
    """Malformed collection descriptors."""

    def test_missing_key_raises(self, hubspot: Integration) -> None:
        collection = CollectionDescriptor(name="Contacts", events={"created": {}})
        with pytest.raises(ValueError, match="no key"):
            generate_flow("created", collection, hubspot)

    def test_missing_name_raises(self, hubspot: Integration) -> None:
        collection = CollectionDescriptor(key="contacts", events={"created": {}})
        with pytest.raises(ValueError, match="no name"):
            generate_flow("created", collection, hubspot)
