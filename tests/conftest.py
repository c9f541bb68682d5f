"""
Pytest configuration and shared fixtures.

Every test runs with an isolated configuration environment: no flowgen
or Integration App variables from the host, a private XDG config home,
and an empty config cache.
"""

import pytest

from flowgen.core.config import clear_cache

FLOWGEN_ENV_VARS = (
    "INTEGRATION_APP_WORKSPACE_KEY",
    "INTEGRATION_APP_WORKSPACE_SECRET",
    "INTEGRATION_APP_TOKEN",
    "INTEGRATION_APP_API_URI",
    "FLOWGEN_OUTPUT_DIR",
    "FLOWGEN_REQUEST_DELAY",
    "FLOWGEN_INTEGRATIONS",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Clear host config and the loader cache around each test."""
    for name in FLOWGEN_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))
    clear_cache()
    yield
    clear_cache()
