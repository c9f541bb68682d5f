"""
Flow sync executor.

Persists a flow document to local storage and submits it to the remote
store with create-if-absent semantics. A flow that already exists
remotely counts as success. No error ever escapes sync(): every failure
is returned as a FAILED outcome so the caller can move on to the next
document.

Example:
    executor = FlowSyncExecutor(store, client)
    outcome = executor.sync(document, integration_key="hubspot")
    if outcome.status == SyncStatus.ALREADY_EXISTS:
        ...
"""

import logging

from flowgen.core.catalog.base import CatalogClient
from flowgen.core.catalog.exceptions import ApiError, StoreError
from flowgen.core.flows.models import FlowDocument, SyncOutcome, SyncStatus
from flowgen.core.flows.store import FlowStore

ALREADY_EXISTS_MARKER = "already exists"
BAD_REQUEST_TYPE = "bad_request"


def is_already_exists(error: Exception) -> bool:
    """
    Decide whether a create error means the flow already exists.

    The remote store signals duplicates as a bad request whose message
    mentions "already exists"; there is no dedicated status code. The
    match is on message text, so it lives here and nowhere else.

    Args:
        error: Exception raised by CatalogClient.create_flow

    Returns:
        True if the error reports an existing flow
    """
    if not isinstance(error, ApiError):
        return False
    is_bad_request = error.error_type == BAD_REQUEST_TYPE or (
        error.error_type is None and error.status_code == 400
    )
    return is_bad_request and ALREADY_EXISTS_MARKER in error.message.lower()


class FlowSyncExecutor:
    """
    Writes flow documents locally and creates them remotely.

    Attributes:
        store: Local flow file store
        client: Remote catalog client used to create flows
        submit: If False, documents are only written locally (dry run)
    """

    def __init__(
        self,
        store: FlowStore,
        client: CatalogClient,
        submit: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.client = client
        self.submit = submit
        self.logger = logger or logging.getLogger(__name__)

    def sync(self, document: FlowDocument, integration_key: str) -> SyncOutcome:
        """
        Write a document to disk and submit it to the remote store.

        Args:
            document: Flow document to sync
            integration_key: Key of the owning integration (scopes the
                local directory)

        Returns:
            SyncOutcome with status CREATED, ALREADY_EXISTS, SKIPPED
            (dry run) or FAILED
        """
        try:
            path = self.store.write(document, integration_key)
        except StoreError as e:
            self.logger.error(f"Error writing flow {document.key}: {e}")
            return SyncOutcome(flow_key=document.key, status=SyncStatus.FAILED, reason=str(e))
        except Exception as e:
            self.logger.exception(f"Unexpected error writing flow {document.key}")
            return SyncOutcome(flow_key=document.key, status=SyncStatus.FAILED, reason=str(e))
        self.logger.info(f"Wrote flow template to {path}")

        if not self.submit:
            return SyncOutcome(flow_key=document.key, status=SyncStatus.SKIPPED, path=path)

        self.logger.info(f"Creating flow: {document.key}")
        try:
            self.client.create_flow(document)
        except Exception as e:
            if is_already_exists(e):
                self.logger.info(f"Flow {document.key} already exists, skipping")
                return SyncOutcome(
                    flow_key=document.key, status=SyncStatus.ALREADY_EXISTS, path=path
                )
            self.logger.error(f"Error creating flow {document.key}: {e}")
            return SyncOutcome(
                flow_key=document.key, status=SyncStatus.FAILED, reason=str(e), path=path
            )

        self.logger.info(f"Flow {document.key} created successfully")
        return SyncOutcome(flow_key=document.key, status=SyncStatus.CREATED, path=path)
