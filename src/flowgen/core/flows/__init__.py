"""
Flows - flow document generation and sync for flowgen.

Generates one flow document per (integration, data collection, event type)
and keeps the remote store in sync with create-if-absent semantics.

The sync executor and traversal service live in
flowgen.core.flows.sync and flowgen.core.flows.service; they depend on
the catalog client protocol and are imported from there directly.
"""

from flowgen.core.flows.models import (
    CollectionDescriptor,
    CollectionSummary,
    FlowDocument,
    Integration,
    SyncOutcome,
    SyncStatus,
    TraversalReport,
)
from flowgen.core.flows.store import FlowStore, render_flow_yaml
from flowgen.core.flows.template import FORWARD_NODE_KEY, flow_key, generate_flow

__all__ = [
    # Models
    "Integration",
    "CollectionSummary",
    "CollectionDescriptor",
    "FlowDocument",
    "SyncStatus",
    "SyncOutcome",
    "TraversalReport",
    # Template
    "FORWARD_NODE_KEY",
    "flow_key",
    "generate_flow",
    # Store
    "FlowStore",
    "render_flow_yaml",
]
