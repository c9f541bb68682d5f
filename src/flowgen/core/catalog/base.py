"""
Catalog client protocol.

This module defines the CatalogClient protocol: the entire remote surface
the flow traversal depends on. Implementations wrap a concrete API (see
flowgen.core.catalog.client); tests substitute in-memory fakes.
"""

from typing import Any, Protocol, runtime_checkable

from flowgen.core.flows.models import (
    CollectionDescriptor,
    CollectionSummary,
    FlowDocument,
    Integration,
)


@runtime_checkable
class CatalogClient(Protocol):
    """
    Protocol for remote integration catalog implementations.

    Clients are responsible for:
    - Listing integrations and their data collections
    - Fetching full collection specifications (events, parameters schema)
    - Creating flows in the remote store
    """

    def list_integrations(self) -> list[Integration]:
        """
        List all integrations in the workspace.

        Returns:
            Integrations in the order the catalog returns them

        Raises:
            CatalogError: If the listing fails
        """
        ...

    def list_collections(self, integration_key: str) -> list[CollectionSummary]:
        """
        List the data collections of one integration.

        Args:
            integration_key: Integration key

        Raises:
            CatalogError: If the listing fails
        """
        ...

    def get_collection(
        self, integration_key: str, collection_key: str
    ) -> CollectionDescriptor:
        """
        Fetch the full specification of one data collection.

        Args:
            integration_key: Integration key
            collection_key: Collection key

        Raises:
            CatalogError: If the fetch fails
        """
        ...

    def create_flow(self, document: FlowDocument) -> dict[str, Any]:
        """
        Create a flow in the remote store.

        Args:
            document: Flow document to create

        Returns:
            The created flow as returned by the remote store

        Raises:
            ApiError: If the remote store rejects the flow (including
                when a flow with the same key already exists)
            CatalogError: On other failures
        """
        ...
