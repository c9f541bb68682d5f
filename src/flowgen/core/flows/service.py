"""
Flow traversal service.

Walks the remote catalog (integrations, then each integration's data
collections, then each collection's event types), generates one flow
document per event and hands it to the sync executor.

Each level is fault-isolated: a failure on one integration, collection
or event is logged and recorded in the report, and traversal continues
with the next sibling. Only the initial integration listing is fatal.

Example:
    store = FlowStore(Path("dist"))
    with IntegrationAppClient(token) as client:
        service = FlowTraversalService(client, FlowSyncExecutor(store, client))
        report = service.run()
    print(f"Created {report.flows_created}, existing {report.flows_existing}")
"""

import logging
from collections.abc import Iterable

from flowgen.core.catalog.base import CatalogClient
from flowgen.core.catalog.exceptions import CatalogError
from flowgen.core.flows.models import (
    CollectionSummary,
    Integration,
    TraversalReport,
)
from flowgen.core.flows.sync import FlowSyncExecutor
from flowgen.core.flows.template import generate_flow
from flowgen.core.flows.throttle import RequestThrottle


class FlowTraversalService:
    """
    Drives flow generation across the whole catalog.

    Strictly sequential: integrations, collections and event types are
    processed one at a time, with the throttle delay applied before every
    collection detail fetch.
    """

    def __init__(
        self,
        client: CatalogClient,
        executor: FlowSyncExecutor,
        throttle: RequestThrottle | None = None,
        integration_keys: Iterable[str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            client: Remote catalog client
            executor: Sync executor for generated documents
            throttle: Delay applied before each collection detail fetch
            integration_keys: Optional set of integration keys to restrict
                the run to. If None or empty, all integrations are processed.
            logger: Logger for the progress narrative
        """
        self.client = client
        self.executor = executor
        self.throttle = throttle or RequestThrottle()
        self.integration_keys = set(integration_keys or ())
        self.logger = logger or logging.getLogger(__name__)

    def run(self) -> TraversalReport:
        """
        Traverse the catalog and sync every flow document.

        Returns:
            TraversalReport with accumulated outcomes

        Raises:
            CatalogError: If the integration listing fails
        """
        report = TraversalReport()

        self.logger.info("Fetching integrations...")
        integrations = self.client.list_integrations()
        self.logger.info(f"Found {len(integrations)} integrations")

        if self.integration_keys:
            integrations = [i for i in integrations if i.key in self.integration_keys]
            missing = self.integration_keys - {i.key for i in integrations}
            for key in sorted(missing):
                self.logger.warning(f"Integration '{key}' not found in catalog")
                report.errors.append(f"Integration '{key}' not found in catalog")

        report.integrations_total = len(integrations)

        for integration in integrations:
            self._process_integration(integration, report)

        self.logger.info(
            f"Flow generation completed: {report.flows_created} created, "
            f"{report.flows_existing} already existed, {report.flows_failed} failed"
        )
        return report

    def _process_integration(self, integration: Integration, report: TraversalReport) -> None:
        self.logger.info(f"Processing integration: {integration.key}")
        try:
            collections = self.client.list_collections(integration.key)
        except CatalogError as e:
            self._integration_failed(integration, report, str(e))
            return
        except Exception as e:
            self.logger.exception(f"Unexpected error listing collections for {integration.key}")
            self._integration_failed(integration, report, str(e))
            return

        report.integrations_processed += 1
        self.logger.info(f"Found {len(collections)} data collections for {integration.key}")

        for summary in collections:
            self._process_collection(integration, summary, report)

    def _integration_failed(
        self, integration: Integration, report: TraversalReport, error: str
    ) -> None:
        self.logger.error(f"Error processing integration {integration.key}: {error}")
        report.integrations_failed += 1
        report.errors.append(f"[{integration.key}] {error}")

    def _process_collection(
        self,
        integration: Integration,
        summary: CollectionSummary,
        report: TraversalReport,
    ) -> None:
        context = f"[{integration.key}/{summary.key}]"
        self.logger.info(f"Processing collection: {summary.key}")

        self.throttle.wait()
        try:
            collection = self.client.get_collection(integration.key, summary.key)
        except Exception as e:
            if not isinstance(e, CatalogError):
                self.logger.exception(f"Unexpected error fetching collection {summary.key}")
            self.logger.error(f"{context} Error fetching collection: {e}")
            report.collections_failed += 1
            report.errors.append(f"{context} {e}")
            return

        collection = collection.with_summary(summary)
        self.logger.debug(
            f"Collection spec for {collection.key}: name={collection.name!r}, "
            f"events={collection.event_types()}, "
            f"parameters_schema={collection.parameters_schema is not None}"
        )

        event_types = collection.event_types()
        if not event_types:
            self.logger.info(f"{context} No events found for collection {summary.key}, skipping")
            report.collections_skipped += 1
            return

        report.collections_processed += 1
        self.logger.info(
            f"Found {len(event_types)} events for collection {summary.key}: "
            f"{', '.join(event_types)}"
        )

        for event_type in event_types:
            self.logger.info(f"Processing event type: {event_type}")
            try:
                document = generate_flow(event_type, collection, integration)
                outcome = self.executor.sync(document, integration.key)
            except Exception as e:
                self.logger.error(f"{context} Error processing event {event_type}: {e}")
                report.flows_failed += 1
                report.errors.append(f"{context} {event_type}: {e}")
                continue

            report.record(outcome, context=context)
