"""
Flow template generation.

Turns one (event type, collection, integration) triple into a complete
flow document: a trigger node listening for the collection event, linked
to a forwarding node that POSTs the event to the application's API.

Example:
    >>> from flowgen.core.flows.models import CollectionDescriptor, Integration
    >>> from flowgen.core.flows.template import generate_flow
    >>> integration = Integration(id="abc", key="hubspot", name="HubSpot")
    >>> collection = CollectionDescriptor(key="contacts", name="Contacts")
    >>> generate_flow("created", collection, integration).key
    'created-contacts-hubspot'
"""

from typing import Any

from flowgen.core.flows.models import CollectionDescriptor, FlowDocument, Integration

# Key and type of the forwarding node; also the trigger node's link target.
FORWARD_NODE_KEY = "api-request-to-your-app"
TRIGGER_NODE_KEY = "trigger"

FORWARD_NODE_NAME = "Send event to API"
EVENTS_URI = "/events"

FLOW_PARAMETERS_VAR = "$.flowInstance.parameters"


def _var(path: str) -> dict[str, str]:
    return {"$var": path}


def flow_key(event_type: str, collection_key: str, integration_key: str) -> str:
    """Build the globally unique key of a flow document."""
    return f"{event_type}-{collection_key}-{integration_key}"


def _trigger_node(
    event_type: str, collection: CollectionDescriptor, with_parameters: bool
) -> dict[str, Any]:
    data_source: dict[str, Any] = {"collectionKey": collection.key}
    if with_parameters:
        data_source["collectionParameters"] = _var(FLOW_PARAMETERS_VAR)

    return {
        "type": f"data-record-{event_type}-trigger",
        "name": f"{event_type}: {collection.name}",
        "config": {"dataSource": data_source},
        "links": [{"key": FORWARD_NODE_KEY}],
    }


def _forward_node(event_type: str, with_parameters: bool) -> dict[str, Any]:
    body: dict[str, Any] = {
        "integrationKey": _var("$.integration.key"),
        "connectionId": _var("$.connection.id"),
        "instanceKey": _var("$.flowInstance.instanceKey"),
        "triggerType": event_type,
        "data": _var("$.input.trigger"),
    }
    if with_parameters:
        body["parameters"] = _var(FLOW_PARAMETERS_VAR)

    return {
        "type": FORWARD_NODE_KEY,
        "name": FORWARD_NODE_NAME,
        "config": {
            "request": {
                "uri": EVENTS_URI,
                "method": "POST",
                "body": body,
            }
        },
    }


def generate_flow(
    event_type: str,
    collection: CollectionDescriptor,
    integration: Integration,
) -> FlowDocument:
    """
    Generate the flow document for one collection event.

    When the collection has a parameters schema, the document carries it
    and both nodes bind the flow instance parameters; otherwise none of
    the three appear.

    Args:
        event_type: Event type name (a key of ``collection.events``)
        collection: Collection descriptor with key and name filled in
        integration: Owning integration

    Returns:
        The generated FlowDocument

    Raises:
        ValueError: If the collection is missing its key or name
    """
    if not collection.key:
        raise ValueError(f"Collection has no key (integration '{integration.key}')")
    if not collection.name:
        raise ValueError(
            f"Collection '{collection.key}' has no name (integration '{integration.key}')"
        )

    with_parameters = collection.parameters_schema is not None

    return FlowDocument(
        key=flow_key(event_type, collection.key, integration.key),
        name=f"{event_type} {collection.name}",
        integration_id=integration.id,
        parameters_schema=collection.parameters_schema if with_parameters else None,
        nodes={
            TRIGGER_NODE_KEY: _trigger_node(event_type, collection, with_parameters),
            FORWARD_NODE_KEY: _forward_node(event_type, with_parameters),
        },
    )


__all__ = [
    "FORWARD_NODE_KEY",
    "TRIGGER_NODE_KEY",
    "flow_key",
    "generate_flow",
]
