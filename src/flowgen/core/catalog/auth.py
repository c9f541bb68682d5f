"""Workspace access token issuance.

Integration App accepts admin tokens signed with the workspace secret:
the workspace key goes in ``iss`` and the claims carry ``isAdmin``.
"""

from datetime import datetime, timedelta, timezone
from typing import cast

from jose import jwt

from flowgen.core.catalog.exceptions import ConfigError

TOKEN_ALGORITHM = "HS512"
DEFAULT_TOKEN_TTL_SECONDS = 7200


def create_workspace_token(
    workspace_key: str | None,
    workspace_secret: str | None,
    ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
) -> str:
    """Sign an admin access token for the workspace.

    Args:
        workspace_key: Workspace key (token issuer).
        workspace_secret: Workspace secret used as the HMAC key.
        ttl_seconds: Token lifetime; keeps leaked tokens short-lived.

    Returns:
        Encoded JWT string.

    Raises:
        ConfigError: If the key or secret is missing, or the TTL is not positive.
    """
    if not workspace_key or not workspace_secret:
        raise ConfigError(
            "INTEGRATION_APP_WORKSPACE_KEY and INTEGRATION_APP_WORKSPACE_SECRET must be set",
            workspace_key_set=bool(workspace_key),
            workspace_secret_set=bool(workspace_secret),
        )
    if ttl_seconds < 1:
        raise ConfigError("Token TTL must be at least 1 second", ttl_seconds=ttl_seconds)

    now = datetime.now(timezone.utc)
    claims = {
        "isAdmin": True,
        "iss": workspace_key,
        "iat": now,
        "exp": now + timedelta(seconds=ttl_seconds),
    }
    encoded = jwt.encode(claims, workspace_secret, algorithm=TOKEN_ALGORITHM)
    return cast(str, encoded)
