"""
Pydantic models for flowgen configuration.

Models validate and type-check settings loaded from JSON config files
and environment variables.
"""

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class WorkspaceConfig(BaseModel):
    """
    Integration App workspace credentials.

    Either a pre-issued token, or a workspace key and secret from which
    a short-lived admin token is signed.
    """
    key: str | None = Field(default=None, description="Workspace key (token issuer)")
    secret: SecretStr | None = Field(default=None, description="Workspace secret")
    token: SecretStr | None = Field(
        default=None,
        description="Pre-issued access token; takes precedence over key/secret"
    )
    token_ttl_seconds: int = Field(
        default=7200,
        ge=1,
        description="Lifetime of tokens signed from key/secret"
    )


class ApiConfig(BaseModel):
    """Remote API connection settings."""
    base_url: str = Field(
        default="https://api.integration.app",
        description="Integration App API base URL"
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout in seconds"
    )


class OutputConfig(BaseModel):
    """Local output settings."""
    root: str = Field(
        default="dist",
        description="Output root; flow files go under <root>/flows/<integration>/"
    )


class TraversalConfig(BaseModel):
    """Catalog traversal settings."""
    request_delay: float = Field(
        default=0.1,
        ge=0,
        description="Seconds to wait before each collection detail fetch"
    )
    integrations: list[str] = Field(
        default_factory=list,
        description="Integration keys to process (empty = all)"
    )

    @field_validator('integrations', mode='before')
    @classmethod
    def split_integrations(cls, v: str | list[str] | None) -> list[str]:
        """Accept a comma-separated string as well as a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v


class FlowgenConfig(BaseModel):
    """
    Top-level flowgen configuration.

    Loaded from defaults, user config, project config, and env vars.

    Example:
        >>> config = FlowgenConfig(traversal=TraversalConfig(request_delay=0.5))
        >>> config.output.root
        'dist'
    """
    workspace: WorkspaceConfig = Field(
        default_factory=WorkspaceConfig,
        description="Workspace credentials"
    )
    api: ApiConfig = Field(
        default_factory=ApiConfig,
        description="Remote API settings"
    )
    output: OutputConfig = Field(
        default_factory=OutputConfig,
        description="Local output settings"
    )
    traversal: TraversalConfig = Field(
        default_factory=TraversalConfig,
        description="Traversal settings"
    )

    model_config = ConfigDict(
        extra="allow",  # Allow extra fields for forward compatibility
        validate_assignment=True,
    )
