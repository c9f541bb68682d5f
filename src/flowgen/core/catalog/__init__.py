"""
Remote integration catalog access.

Provides the CatalogClient protocol, its Integration App implementation,
workspace token issuance, and the flowgen exception hierarchy.
"""

from flowgen.core.catalog.auth import create_workspace_token
from flowgen.core.catalog.base import CatalogClient
from flowgen.core.catalog.client import IntegrationAppClient
from flowgen.core.catalog.exceptions import (
    ApiError,
    CatalogError,
    ConfigError,
    FlowgenError,
    NetworkError,
    ParseError,
    StoreError,
)

__all__ = [
    "CatalogClient",
    "IntegrationAppClient",
    "create_workspace_token",
    # Exceptions
    "FlowgenError",
    "ConfigError",
    "CatalogError",
    "NetworkError",
    "ApiError",
    "ParseError",
    "StoreError",
]
