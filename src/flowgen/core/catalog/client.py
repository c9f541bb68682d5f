"""
Integration App catalog client.

Implements the CatalogClient protocol against the Integration App REST API
using httpx. Authenticates with a workspace bearer token (see
flowgen.core.catalog.auth).

API Endpoints:
- List integrations: GET {base}/integrations?cursor={cursor}
- List collections:  GET {base}/integrations/{integrationKey}/data
- Get collection:    GET {base}/integrations/{integrationKey}/data/{collectionKey}
- Create flow:       POST {base}/flows

List responses are either a bare JSON array or an envelope:
{
  "items": [ ... ],
  "cursor": "next-page-cursor"
}

Error responses carry a JSON body such as:
{
  "type": "bad_request",
  "message": "Flow with key 'created-contacts-hubspot' already exists"
}

Example:
    >>> with IntegrationAppClient(token) as client:
    ...     for integration in client.list_integrations():
    ...         print(integration.key)
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from flowgen.core.catalog.exceptions import ApiError, NetworkError, ParseError
from flowgen.core.flows.models import (
    CollectionDescriptor,
    CollectionSummary,
    FlowDocument,
    Integration,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.integration.app"
DEFAULT_TIMEOUT = 30.0


def _error_details(response: httpx.Response) -> tuple[str | None, str]:
    """Extract (error type, message) from an error response body."""
    try:
        body = response.json()
    except ValueError:
        return None, response.text or response.reason_phrase

    if not isinstance(body, dict):
        return None, str(body)

    # Some endpoints nest the error under "data"
    data = body.get("data") if isinstance(body.get("data"), dict) else body
    error_type = data.get("type") or body.get("type")
    message = data.get("message") or body.get("message") or response.reason_phrase
    return error_type, str(message)


class IntegrationAppClient:
    """
    Catalog client for the Integration App workspace API.

    Wraps a single httpx.Client so connections are reused across the
    traversal. Use as a context manager, or call close() when done.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            token: Workspace access token
            base_url: API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self._http = httpx.Client(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def __enter__(self) -> "IntegrationAppClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> Any:
        """
        Make a request and return the decoded JSON body.

        Raises:
            NetworkError: On timeouts and transport failures
            ApiError: On HTTP error responses
            ParseError: If the response body is not valid JSON
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = self._http.request(method, path, params=params, json=json)
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Request timed out: {method} {path}",
                url=url,
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(
                f"Network error during {method} {path}: {e}",
                url=url,
            ) from e

        if response.is_error:
            error_type, message = _error_details(response)
            raise ApiError(
                message,
                status_code=response.status_code,
                error_type=error_type,
                url=url,
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ParseError(
                f"Failed to parse JSON response from {method} {path}",
                url=url,
            ) from e

    @staticmethod
    def _items(data: Any, path: str) -> list[dict[str, Any]]:
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get("items"), list):
            return data["items"]
        raise ParseError(
            f"Expected a list response from {path}",
            response_type=type(data).__name__,
        )

    def list_integrations(self) -> list[Integration]:
        """
        List all integrations, following pagination cursors.

        Raises:
            CatalogError: If any page fails or cannot be parsed
        """
        integrations: list[Integration] = []
        params: dict[str, str] = {}

        while True:
            data = self._request("GET", "/integrations", params=params or None)
            try:
                integrations.extend(
                    Integration.model_validate(item)
                    for item in self._items(data, "/integrations")
                )
            except ValidationError as e:
                raise ParseError(f"Invalid integration in response: {e}") from e

            cursor = data.get("cursor") if isinstance(data, dict) else None
            if not cursor:
                break
            params = {"cursor": str(cursor)}

        return integrations

    def list_collections(self, integration_key: str) -> list[CollectionSummary]:
        path = f"/integrations/{quote(integration_key, safe='')}/data"
        data = self._request("GET", path)
        try:
            return [CollectionSummary.model_validate(item) for item in self._items(data, path)]
        except ValidationError as e:
            raise ParseError(
                f"Invalid collection in response: {e}",
                integration_key=integration_key,
            ) from e

    def get_collection(
        self, integration_key: str, collection_key: str
    ) -> CollectionDescriptor:
        path = (
            f"/integrations/{quote(integration_key, safe='')}"
            f"/data/{quote(collection_key, safe='')}"
        )
        data = self._request("GET", path)
        if not isinstance(data, dict):
            raise ParseError(
                f"Expected an object response from {path}",
                response_type=type(data).__name__,
            )
        try:
            return CollectionDescriptor.model_validate(data)
        except ValidationError as e:
            raise ParseError(
                f"Invalid collection specification: {e}",
                integration_key=integration_key,
                collection_key=collection_key,
            ) from e

    def create_flow(self, document: FlowDocument) -> dict[str, Any]:
        data = self._request("POST", "/flows", json=document.to_payload())
        return data if isinstance(data, dict) else {}
