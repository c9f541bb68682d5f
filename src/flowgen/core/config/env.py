"""Environment loading helpers.

Workspace credentials usually sit in a ``.env`` file next to the project.
Files are loaded with python-dotenv without overriding, highest priority
first, so the effective order is:

    OS environment > .env.local > .env > ~/.config/flowgen/.env
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from dotenv import load_dotenv

from .loader import get_xdg_config_home

logger = logging.getLogger(__name__)


def default_env_files(project_dir: Path | None = None) -> list[Path]:
    """Env files consulted by flowgen, highest priority first."""
    project_dir = project_dir or Path.cwd()
    return [
        project_dir / ".env.local",
        project_dir / ".env",
        get_xdg_config_home() / "flowgen" / ".env",
    ]


def load_layered_env(
    *,
    project_dir: Path | None = None,
    env_files: Iterable[Path] | None = None,
) -> list[Path]:
    """Load workspace settings from .env files into ``os.environ``.

    Variables already set are never overridden, which makes earlier
    files win over later ones and the OS environment win over all.

    Args:
        project_dir: Directory holding the project .env files (defaults to cwd)
        env_files: Explicit files to load, highest priority first

    Returns:
        The files that existed and were loaded
    """
    paths = list(env_files) if env_files is not None else default_env_files(project_dir)
    loaded = [path for path in paths if path.is_file()]
    for path in loaded:
        load_dotenv(path, override=False)
        logger.debug(f"Loaded environment from {path}")
    return loaded
