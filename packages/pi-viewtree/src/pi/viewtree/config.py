"""Runtime configuration, read from ``PI_VIEWTREE_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_ROW_PENALTY = 10_000


@dataclass
class Config:
    """Tunables for layout checks and focus navigation."""

    # Raise instead of warning when a viewport is pushed outside its parent.
    strict_viewstack: bool = False
    # Score added per cell of row (or column) misalignment during directional
    # focus moves.
    row_penalty: int = DEFAULT_ROW_PENALTY


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %d", name, raw, default)
        return default


def load_config() -> Config:
    """Build a Config from the current environment."""
    return Config(
        strict_viewstack=os.environ.get("PI_VIEWTREE_STRICT") == "1",
        row_penalty=_env_int("PI_VIEWTREE_ROW_PENALTY", DEFAULT_ROW_PENALTY),
    )
