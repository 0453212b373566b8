"""Project configuration."""
from __future__ import annotations

from .loader import SEARCH_PLACES, ConfigLoader, default_config_data, expand_env_vars
from .models import DEFAULT_OVERLAY_PATH, Config, MCPServerConfig, OverlaySettings

__all__ = [
    "SEARCH_PLACES",
    "ConfigLoader",
    "default_config_data",
    "expand_env_vars",
    "DEFAULT_OVERLAY_PATH",
    "Config",
    "MCPServerConfig",
    "OverlaySettings",
]
