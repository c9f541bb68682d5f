"""
Custom exceptions for flowgen.

This module defines a hierarchy of exceptions for talking to the remote
integration catalog and writing flow files, providing structured error
handling with context preservation.

Exception Hierarchy:
    FlowgenError (base)
    ├── ConfigError (missing credentials, invalid settings)
    ├── CatalogError (remote catalog errors)
    │   ├── NetworkError (transport failures, timeouts)
    │   ├── ApiError (HTTP error responses)
    │   └── ParseError (unparseable responses)
    └── StoreError (local flow file errors)

Example:
    >>> from flowgen.core.catalog.exceptions import ApiError
    >>> try:
    ...     raise ApiError(
    ...         "Flow already exists",
    ...         status_code=400,
    ...         error_type="bad_request",
    ...         url="https://api.integration.app/flows",
    ...     )
    ... except ApiError as e:
    ...     print(f"{e.status_code} {e.error_type}: {e}")
    ...     print(f"Context: {e.context}")
"""


class FlowgenError(Exception):
    """
    Base exception for all flowgen errors.

    Attributes:
        message: Human-readable error message
        context: Optional dictionary of additional context
    """

    def __init__(self, message: str, **context: object) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        return self.message


class ConfigError(FlowgenError):
    """Raised when configuration is missing or invalid."""


class CatalogError(FlowgenError):
    """
    Base exception for remote catalog errors.

    Raised when listing integrations, reading collections, or creating
    flows fails. The original exception is preserved via ``__cause__``.
    """


class NetworkError(CatalogError):
    """
    Exception for transport-level failures.

    Example:
        >>> import httpx
        >>> try:
        ...     raise httpx.ConnectError("Connection refused")
        ... except httpx.ConnectError as e:
        ...     raise NetworkError(
        ...         "Failed to connect to the catalog API",
        ...         url="https://api.integration.app/integrations",
        ...     ) from e
    """


class ApiError(CatalogError):
    """
    Exception for HTTP error responses from the catalog API.

    Attributes:
        status_code: HTTP status code of the response
        error_type: Error type reported in the response body (e.g. "bad_request")
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        **context: object,
    ) -> None:
        super().__init__(message, status_code=status_code, error_type=error_type, **context)
        self.status_code = status_code
        self.error_type = error_type

    def __str__(self) -> str:
        return f"HTTP {self.status_code}: {self.message}"


class ParseError(CatalogError):
    """
    Exception for responses that cannot be parsed or validated.

    Example:
        >>> try:
        ...     data = response.json()
        ... except ValueError as e:
        ...     raise ParseError(
        ...         "Invalid JSON in API response",
        ...         url=url,
        ...     ) from e
    """


class StoreError(FlowgenError):
    """
    Exception for local flow storage errors.

    Raised when a flow file or its directory cannot be written.
    """


__all__ = [
    "FlowgenError",
    "ConfigError",
    "CatalogError",
    "NetworkError",
    "ApiError",
    "ParseError",
    "StoreError",
]
