"""Project configuration loading.

Configuration is searched upward from a start directory. The first existing
file of ``SEARCH_PLACES`` wins and is layered over the bundled defaults
(``faber.data/config/defaults.yaml``). No file found means defaults only.
"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

import yaml

from faber.core.errors import ConfigError, UnsupportedConfigFormatError
from faber.core.schemas import SchemaValidationError, validate_payload
from faber.core.utils.io import dump_yaml_string, read_text, write_text
from faber.core.utils.merge import deep_merge
from faber.data import read_yaml as read_data_yaml

from .models import Config

logger = logging.getLogger(__name__)

SEARCH_PLACES: Tuple[str, ...] = (
    ".faber/config.yml",
    ".faber/config.yaml",
    ".faber/config.json",
    ".faberrc",
    ".faberrc.yml",
    ".faberrc.yaml",
    ".faberrc.json",
)

_YAML_SUFFIXES = {".yml", ".yaml"}
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def default_config_data() -> Dict[str, Any]:
    """A fresh copy of the bundled default configuration."""
    return copy.deepcopy(read_data_yaml("config", "defaults.yaml") or {})


def expand_env_vars(value: Any, environ: Optional[Mapping[str, str]] = None) -> Any:
    """Replace ``${VAR}`` in every string; unset variables are left as-is.

    Example:
        >>> expand_env_vars({"key": "${TOKEN}"}, {"TOKEN": "abc"})
        {'key': 'abc'}
    """
    env = os.environ if environ is None else environ
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(lambda m: env.get(m.group(1)) or m.group(0), value)
    if isinstance(value, dict):
        return {k: expand_env_vars(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(v, env) for v in value]
    return value


class ConfigLoader:
    """Find, parse, validate and save project configuration."""

    def __init__(self, search_places: Iterable[str] = SEARCH_PLACES) -> None:
        self.search_places = tuple(search_places)

    def find(self, start: Union[str, Path, None] = None) -> Optional[Path]:
        """Return the first config file found walking up from ``start``."""
        current = Path(start or Path.cwd()).resolve()
        for directory in (current, *current.parents):
            for place in self.search_places:
                candidate = directory / place
                if candidate.is_file():
                    return candidate
        return None

    def load(self, start: Union[str, Path, None] = None) -> Config:
        """Search upward from ``start`` and build a Config (defaults when none)."""
        path = self.find(start)
        if path is None:
            logger.debug("No project config found from %s; using defaults", start or Path.cwd())
            return self.build({})
        logger.debug("Loading project config from %s", path)
        return self.build(self._parse(path, allow_extensionless=True))

    def load_from_file(self, path: Union[str, Path]) -> Config:
        """Load a specific ``.yml``/``.yaml``/``.json`` file.

        Raises:
            UnsupportedConfigFormatError: Any other extension.
            ConfigError: Malformed content or schema violations.
        """
        return self.build(self._parse(Path(path)))

    def build(self, data: Mapping[str, Any]) -> Config:
        """Layer ``data`` over defaults, expand env vars, validate and type it."""
        return self.finalize(self.merge(default_config_data(), data))

    def finalize(self, data: Mapping[str, Any]) -> Config:
        """Expand env vars in an already-merged mapping, validate and type it."""
        expanded = expand_env_vars(dict(data))
        self.validate(expanded)
        return Config.from_dict(expanded)

    def validate(self, data: Mapping[str, Any]) -> None:
        try:
            validate_payload(dict(data), "config")
        except SchemaValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc

    def merge(self, *configs: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Deep-merge raw configs left to right; later lists replace earlier ones."""
        merged: Dict[str, Any] = {}
        for cfg in configs:
            if cfg:
                merged = deep_merge(merged, cfg, concat_lists=False)
        return merged

    def save(self, config: Union[Config, Mapping[str, Any]], path: Union[str, Path]) -> Path:
        """Write ``config`` as YAML or JSON depending on the extension."""
        target = Path(path)
        data = config.to_dict() if isinstance(config, Config) else dict(config)
        if target.suffix in _YAML_SUFFIXES:
            content = dump_yaml_string(data)
        elif target.suffix == ".json":
            content = json.dumps(data, indent=2, sort_keys=True) + "\n"
        else:
            raise UnsupportedConfigFormatError(f"Unsupported config file format: {target.suffix or target.name}")
        return write_text(target, content)

    def _parse(self, path: Path, *, allow_extensionless: bool = False) -> Dict[str, Any]:
        suffix = path.suffix
        # ``.faberrc`` has no extension; YAML also accepts JSON content.
        if suffix in _YAML_SUFFIXES or (allow_extensionless and path.name == ".faberrc"):
            loader = yaml.safe_load
            errors: Tuple[type, ...] = (yaml.YAMLError,)
        elif suffix == ".json":
            loader = json.loads
            errors = (json.JSONDecodeError,)
        else:
            raise UnsupportedConfigFormatError(f"Unsupported config file format: {suffix or path.name}")

        try:
            data = loader(read_text(path))
        except errors as exc:
            raise ConfigError(f"Failed to parse config {path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must be a mapping")
        return data


__all__ = [
    "SEARCH_PLACES",
    "ConfigLoader",
    "default_config_data",
    "expand_env_vars",
]
