"""
Configuration loading for flowgen.

Layers, lowest to highest precedence:
    built-in defaults < ~/.config/flowgen/config.json < .flowgen.json < env vars

CLI flags are applied on top by the commands themselves.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import FlowgenConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = ".flowgen.json"

# Env var -> (section, field). FLOWGEN_REQUEST_DELAY is parsed separately.
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "INTEGRATION_APP_WORKSPACE_KEY": ("workspace", "key"),
    "INTEGRATION_APP_WORKSPACE_SECRET": ("workspace", "secret"),
    "INTEGRATION_APP_TOKEN": ("workspace", "token"),
    "INTEGRATION_APP_API_URI": ("api", "base_url"),
    "FLOWGEN_OUTPUT_DIR": ("output", "root"),
    "FLOWGEN_INTEGRATIONS": ("traversal", "integrations"),
}

_config_cache: FlowgenConfig | None = None


def get_xdg_config_home() -> Path:
    """Return $XDG_CONFIG_HOME, or ~/.config when unset."""
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    return Path(xdg_home) if xdg_home else Path.home() / ".config"


def get_user_config_path() -> Path:
    return get_xdg_config_home() / "flowgen" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    return (cwd or Path.cwd()) / PROJECT_CONFIG_NAME


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Merge ``override`` into a copy of ``base``; config sections merge key by key.

    Example:
        >>> deep_merge({"api": {"timeout": 30.0}}, {"api": {"base_url": "x"}})
        {'api': {'timeout': 30.0, 'base_url': 'x'}}
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Read a JSON config file.

    A missing file, unparseable JSON or a non-object document yields None;
    broken files are reported as a warning rather than failing the run.
    """
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to parse config at {path}: {e}")
        return None
    return data if isinstance(data, dict) else None


def _request_delay_from_env() -> float | None:
    raw = os.environ.get("FLOWGEN_REQUEST_DELAY")
    if not raw:
        return None
    try:
        delay = float(raw)
    except ValueError:
        logger.warning(f"Invalid FLOWGEN_REQUEST_DELAY value '{raw}', ignoring")
        return None
    if delay < 0:
        logger.warning(f"FLOWGEN_REQUEST_DELAY must be >= 0, got {delay}, ignoring")
        return None
    return delay


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Overlay environment variables onto a config dict.

    Supported env vars:
        INTEGRATION_APP_WORKSPACE_KEY - workspace.key
        INTEGRATION_APP_WORKSPACE_SECRET - workspace.secret
        INTEGRATION_APP_TOKEN - workspace.token
        INTEGRATION_APP_API_URI - api.base_url
        FLOWGEN_OUTPUT_DIR - output.root
        FLOWGEN_REQUEST_DELAY - traversal.request_delay (invalid values ignored)
        FLOWGEN_INTEGRATIONS - traversal.integrations (comma-separated)
    """
    overrides: dict[str, dict[str, Any]] = {}
    for env_var, (section, field) in ENV_OVERRIDES.items():
        if value := os.environ.get(env_var):
            overrides.setdefault(section, {})[field] = value

    delay = _request_delay_from_env()
    if delay is not None:
        overrides.setdefault("traversal", {})["request_delay"] = delay

    return deep_merge(config_dict, overrides)


def get_default_config() -> dict[str, Any]:
    """Built-in defaults, the lowest layer."""
    return FlowgenConfig().model_dump(exclude_none=True)


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> FlowgenConfig:
    """
    Load and validate the layered configuration.

    Args:
        project_dir: Directory holding .flowgen.json (defaults to cwd)
        use_cache: Return the config from a previous call if there is one

    Raises:
        ValidationError: If the merged values fail validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()
    for path in (get_user_config_path(), get_project_config_path(project_dir)):
        if layer := load_json_file(path):
            logger.debug(f"Loaded config layer {path}")
            merged = deep_merge(merged, layer)

    _config_cache = FlowgenConfig(**apply_env_overrides(merged))
    return _config_cache


def clear_cache() -> None:
    """Drop the cached config so the next load_config() rereads all layers."""
    global _config_cache
    _config_cache = None
