"""Tests for workspace token issuance."""

import time

import pytest
from jose import jwt

from flowgen.core.catalog.auth import (
    DEFAULT_TOKEN_TTL_SECONDS,
    TOKEN_ALGORITHM,
    create_workspace_token,
)
from flowgen.core.catalog.exceptions import ConfigError


class TestCreateWorkspaceToken:
    """Tests for create_workspace_token()."""

    def test_claims(self) -> None:
        """Token is issued by the workspace key with admin rights."""
        token = create_workspace_token("ws-key", "ws-secret")

        claims = jwt.decode(token, "ws-secret", algorithms=[TOKEN_ALGORITHM])

        assert claims["iss"] == "ws-key"
        assert claims["isAdmin"] is True
        assert claims["exp"] - claims["iat"] == DEFAULT_TOKEN_TTL_SECONDS

    def test_header_algorithm(self) -> None:
        token = create_workspace_token("ws-key", "ws-secret")
        assert jwt.get_unverified_header(token)["alg"] == "HS512"

    def test_custom_ttl(self) -> None:
        token = create_workspace_token("ws-key", "ws-secret", ttl_seconds=60)

        claims = jwt.decode(token, "ws-secret", algorithms=[TOKEN_ALGORITHM])

        assert claims["exp"] - claims["iat"] == 60
        assert claims["exp"] > time.time()

    def test_wrong_secret_fails_verification(self) -> None:
        token = create_workspace_token("ws-key", "ws-secret")

        with pytest.raises(jwt.JWTError):
            jwt.decode(token, "other-secret", algorithms=[TOKEN_ALGORITHM])

    @pytest.mark.parametrize(
        ("key", "secret"),
        [(None, "ws-secret"), ("ws-key", None), ("", "ws-secret"), (None, None)],
    )
    def test_missing_credentials(self, key: str | None, secret: str | None) -> None:
        with pytest.raises(ConfigError) as exc_info:
            create_workspace_token(key, secret)

        assert "INTEGRATION_APP_WORKSPACE_KEY" in str(exc_info.value)
        assert exc_info.value.context["workspace_key_set"] is bool(key)

    def test_non_positive_ttl(self) -> None:
        with pytest.raises(ConfigError, match="TTL"):
            create_workspace_token("ws-key", "ws-secret", ttl_seconds=0)
