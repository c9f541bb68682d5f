"""
Catalog and flow models for flowgen.

Defines Pydantic models for the entities read from the remote integration
catalog (integrations, data collections) and for the flow documents
generated from them, plus the outcome types reported by a sync run.

Example:
    >>> from flowgen.core.flows.models import CollectionDescriptor, Integration
    >>> integration = Integration(id="abc", key="hubspot", name="HubSpot")
    >>> collection = CollectionDescriptor(
    ...     key="contacts",
    ...     name="Contacts",
    ...     events={"created": {}, "updated": {}},
    ... )
    >>> collection.event_types()
    ['created', 'updated']
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Integration(BaseModel):
    """
    A third-party system the workspace connects to (e.g. a CRM).

    Attributes:
        id: Remote-assigned identifier
        key: Stable integration key (e.g. "hubspot")
        name: Display name
    """

    id: str = Field(..., min_length=1, description="Remote-assigned integration id")
    key: str = Field(..., min_length=1, description="Stable integration key")
    name: str = Field(default="", description="Display name")

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )


class CollectionSummary(BaseModel):
    """A data collection entry as returned by the collection listing."""

    key: str = Field(..., min_length=1, description="Stable collection key")
    name: str | None = Field(default=None, description="Display name")

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )


class CollectionDescriptor(BaseModel):
    """
    Full specification of a data collection.

    Attributes:
        key: Stable collection key (e.g. "contacts")
        name: Display name (e.g. "Contacts")
        events: Mapping of event type name to event metadata. May be absent.
        parameters_schema: Schema of the runtime parameters needed to
            instantiate triggers against this collection. When present it
            changes the shape of every generated flow document.
    """

    key: str | None = Field(default=None, description="Stable collection key")
    name: str | None = Field(default=None, description="Display name")
    events: dict[str, Any] | None = Field(
        default=None,
        description="Event type name to event metadata",
    )
    parameters_schema: dict[str, Any] | None = Field(
        default=None,
        alias="parametersSchema",
        description="Schema for collection runtime parameters",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    def event_types(self) -> list[str]:
        """Return event type names in mapping order (empty if no events)."""
        return list(self.events or {})

    def with_summary(self, summary: CollectionSummary) -> "CollectionDescriptor":
        """
        Backfill key and name from the listing summary.

        The summary key always wins; the summary name wins when present,
        otherwise the detail name is kept.
        """
        return self.model_copy(
            update={
                "key": summary.key,
                "name": summary.name or self.name,
            }
        )


class FlowDocument(BaseModel):
    """
    A generated flow configuration document.

    Attributes:
        key: "{eventType}-{collectionKey}-{integrationKey}"
        name: "{eventType} {collectionName}"
        integration_id: Id of the owning integration
        parameters_schema: Copied verbatim from the collection when present
        nodes: Two-node graph (trigger node and forwarding node)
    """

    key: str = Field(..., min_length=1, description="Globally unique flow key")
    name: str = Field(..., min_length=1, description="Display name")
    integration_id: str = Field(..., alias="integrationId", description="Integration id")
    parameters_schema: dict[str, Any] | None = Field(
        default=None,
        alias="parametersSchema",
        description="Flow parameters schema",
    )
    nodes: dict[str, Any] = Field(default_factory=dict, description="Flow node graph")

    model_config = ConfigDict(
        populate_by_name=True,
    )

    def to_payload(self) -> dict[str, Any]:
        """
        Serialize to the wire/file representation.

        Field order is fixed and ``parametersSchema`` only appears when the
        document carries one.
        """
        payload: dict[str, Any] = {
            "key": self.key,
            "name": self.name,
            "integrationId": self.integration_id,
        }
        if self.parameters_schema is not None:
            payload["parametersSchema"] = self.parameters_schema
        payload["nodes"] = self.nodes
        return payload


class SyncStatus(str, Enum):
    """Result classification of syncing one flow document."""

    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"
    SKIPPED = "skipped"


class SyncOutcome(BaseModel):
    """
    Outcome of syncing one flow document.

    Attributes:
        flow_key: Key of the synced document
        status: How the sync ended
        reason: Failure reason (only for FAILED)
        path: Local file the document was written to, if it was written
    """

    flow_key: str = Field(..., description="Flow document key")
    status: SyncStatus = Field(..., description="Sync result")
    reason: str | None = Field(default=None, description="Failure reason")
    path: Path | None = Field(default=None, description="Local file path")

    @property
    def ok(self) -> bool:
        return self.status != SyncStatus.FAILED


class TraversalReport(BaseModel):
    """
    Accumulated outcomes of a traversal run.

    Counters are folded level by level; ``errors`` holds one message per
    abandoned unit with enough context (integration, collection, event)
    to diagnose it.
    """

    integrations_total: int = Field(default=0, description="Integrations listed")
    integrations_processed: int = Field(
        default=0, description="Integrations whose collections were listed"
    )
    integrations_failed: int = Field(default=0, description="Integrations skipped on error")
    collections_processed: int = Field(default=0, description="Collections with events")
    collections_skipped: int = Field(default=0, description="Collections without events")
    collections_failed: int = Field(default=0, description="Collections skipped on error")
    flows_created: int = Field(default=0, description="Flows created remotely")
    flows_existing: int = Field(default=0, description="Flows that already existed")
    flows_written: int = Field(default=0, description="Flows written locally only")
    flows_failed: int = Field(default=0, description="Flows that failed to sync")
    errors: list[str] = Field(default_factory=list, description="Error messages")

    model_config = ConfigDict(
        populate_by_name=True,
    )

    def record(self, outcome: SyncOutcome, context: str = "") -> None:
        """Fold one sync outcome into the counters.

        Args:
            outcome: Outcome returned by the sync executor
            context: Prefix for the error message of a failed outcome
        """
        if outcome.status == SyncStatus.CREATED:
            self.flows_created += 1
        elif outcome.status == SyncStatus.ALREADY_EXISTS:
            self.flows_existing += 1
        elif outcome.status == SyncStatus.SKIPPED:
            self.flows_written += 1
        else:
            self.flows_failed += 1
            prefix = f"{context} " if context else ""
            self.errors.append(f"{prefix}{outcome.flow_key}: {outcome.reason}")

    @property
    def flows_total(self) -> int:
        return self.flows_created + self.flows_existing + self.flows_written + self.flows_failed
