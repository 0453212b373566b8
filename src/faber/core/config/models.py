"""Typed project configuration.

``Config`` replaces free-form key paths with explicit fields. Unknown top-level
keys are preserved in ``extra`` and round-trip through ``to_dict``.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from faber.core.errors import ConfigError, MCPServerConfigError

DEFAULT_OVERLAY_PATH = ".faber/overlays"

_KNOWN_KEYS = ("platforms", "mcp_servers", "overlays", "bindings")


@dataclass(frozen=True)
class MCPServerConfig:
    """One MCP server: exactly one of ``command`` (stdio) or ``url`` (remote)."""

    name: str
    command: Optional[str] = None
    url: Optional[str] = None
    args: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)
    api_key: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.command and not self.url:
            raise MCPServerConfigError(f"MCP server '{self.name}' must have either 'command' or 'url'")
        if self.command and self.url:
            raise MCPServerConfigError(f"MCP server '{self.name}' cannot have both 'command' and 'url'")

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "MCPServerConfig":
        if not isinstance(data, Mapping):
            raise MCPServerConfigError(f"MCP server '{name}' must be a mapping")
        return cls(
            name=name,
            command=data.get("command"),
            url=data.get("url"),
            args=[str(a) for a in data.get("args") or []],
            env={str(k): str(v) for k, v in (data.get("env") or {}).items()},
            api_key=data.get("api_key"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.command:
            result["command"] = self.command
            if self.args:
                result["args"] = list(self.args)
        if self.url:
            result["url"] = self.url
        if self.env:
            result["env"] = dict(self.env)
        if self.api_key:
            result["api_key"] = self.api_key
        return result


@dataclass(frozen=True)
class OverlaySettings:
    enabled: bool = True
    paths: List[str] = field(default_factory=lambda: [DEFAULT_OVERLAY_PATH])

    @property
    def root(self) -> str:
        """The overlay root (first configured path)."""
        return self.paths[0] if self.paths else DEFAULT_OVERLAY_PATH

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "OverlaySettings":
        data = data or {}
        paths = data.get("paths")
        return cls(
            enabled=bool(data.get("enabled", True)),
            paths=[str(p) for p in paths] if paths else [DEFAULT_OVERLAY_PATH],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"enabled": self.enabled, "paths": list(self.paths)}


@dataclass(frozen=True)
class Config:
    """Project configuration passed explicitly into every build.

    Attributes:
        platforms: Role name or ``platform_config_key`` -> platform name
        mcp_servers: Server name -> MCP server settings
        overlays: Overlay enablement and search paths
        bindings: Framework name -> free-form binding settings
        extra: Unknown top-level keys, preserved verbatim
    """

    platforms: Dict[str, str] = field(default_factory=dict)
    mcp_servers: Dict[str, MCPServerConfig] = field(default_factory=dict)
    overlays: OverlaySettings = field(default_factory=OverlaySettings)
    bindings: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Config":
        """Build a Config from a raw mapping.

        Raises:
            ConfigError: A known section has the wrong shape.
            MCPServerConfigError: An MCP server declares both or neither of command/url.
        """
        data = dict(data or {})
        for key in _KNOWN_KEYS:
            if data.get(key) is not None and not isinstance(data[key], Mapping):
                raise ConfigError(f"Config section '{key}' must be a mapping")

        servers = data.get("mcp_servers") or {}
        return cls(
            platforms={str(k): str(v) for k, v in (data.get("platforms") or {}).items()},
            mcp_servers={str(n): MCPServerConfig.from_dict(str(n), s) for n, s in servers.items()},
            overlays=OverlaySettings.from_dict(data.get("overlays")),
            bindings={str(k): dict(v or {}) for k, v in (data.get("bindings") or {}).items()},
            extra={k: copy.deepcopy(v) for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = copy.deepcopy(self.extra)
        result.update(
            {
                "platforms": dict(self.platforms),
                "mcp_servers": {n: s.to_dict() for n, s in self.mcp_servers.items()},
                "overlays": self.overlays.to_dict(),
                "bindings": copy.deepcopy(self.bindings),
            }
        )
        return result

    def get(self, key_path: str, default: Any = None) -> Any:
        """Look up a dotted path (``"overlays.enabled"``) in ``to_dict()``."""
        value: Any = self.to_dict()
        for key in key_path.split("."):
            if isinstance(value, Mapping) and key in value:
                value = value[key]
            else:
                return default
        return value


__all__ = ["DEFAULT_OVERLAY_PATH", "MCPServerConfig", "OverlaySettings", "Config"]
