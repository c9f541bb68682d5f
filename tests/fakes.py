"""
Test doubles shared across the flowgen test suite.

FakeCatalog is an in-memory CatalogClient that records every call and
rejects duplicate flow creation the way the remote store does.
"""

from typing import Any

from flowgen.core.catalog.exceptions import ApiError, NetworkError
from flowgen.core.flows.models import (
    CollectionDescriptor,
    CollectionSummary,
    FlowDocument,
    Integration,
)


class FakeCatalog:
    """In-memory catalog client for testing."""

    def __init__(
        self,
        integrations: list[Integration] | None = None,
        collections: dict[str, list[CollectionSummary]] | None = None,
        details: dict[tuple[str, str], CollectionDescriptor] | None = None,
        list_error: Exception | None = None,
        failing_integrations: set[str] | None = None,
        failing_collections: set[tuple[str, str]] | None = None,
        create_errors: dict[str, Exception] | None = None,
    ):
        self.integrations = integrations or []
        self.collections = collections or {}
        self.details = details or {}
        self.list_error = list_error
        self.failing_integrations = failing_integrations or set()
        self.failing_collections = failing_collections or set()
        self.create_errors = create_errors or {}
        self.created: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, ...]] = []

    def __enter__(self) -> "FakeCatalog":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.calls.append(("close",))

    def list_integrations(self) -> list[Integration]:
        self.calls.append(("list_integrations",))
        if self.list_error:
            raise self.list_error
        return list(self.integrations)

    def list_collections(self, integration_key: str) -> list[CollectionSummary]:
        self.calls.append(("list_collections", integration_key))
        if integration_key in self.failing_integrations:
            raise NetworkError(f"Connection refused for {integration_key}")
        return list(self.collections.get(integration_key, []))

    def get_collection(
        self, integration_key: str, collection_key: str
    ) -> CollectionDescriptor:
        self.calls.append(("get_collection", integration_key, collection_key))
        if (integration_key, collection_key) in self.failing_collections:
            raise ApiError("Internal server error", status_code=500)
        return self.details[(integration_key, collection_key)]

    def create_flow(self, document: FlowDocument) -> dict[str, Any]:
        self.calls.append(("create_flow", document.key))
        if document.key in self.create_errors:
            raise self.create_errors[document.key]
        if document.key in self.created:
            raise ApiError(
                f"Flow with key '{document.key}' already exists",
                status_code=400,
                error_type="bad_request",
            )
        payload = document.to_payload()
        self.created[document.key] = payload
        return {"id": f"flow-{len(self.created)}", **payload}
