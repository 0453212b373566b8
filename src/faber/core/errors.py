"""Faber error classes.

Fatal load/construction failures are raised as subclasses of ``FaberError``.
Recoverable concept-quality findings are never raised; they are collected in a
``ValidationResult`` (see ``faber.core.validation``).
"""
from __future__ import annotations


class FaberError(Exception):
    """Base class for all fatal Faber errors."""
    pass


class ConceptLoadError(FaberError):
    """Raised when a concept directory cannot be loaded."""
    pass


class NotFoundError(ConceptLoadError):
    """Raised when a concept path is missing or is not a directory."""
    pass


class MetadataMissingError(ConceptLoadError):
    """Raised when no metadata file exists in a concept directory."""
    pass


class MetadataParseError(ConceptLoadError):
    """Raised when concept metadata (or a binding override) is malformed."""
    pass


class TypeMismatchError(ConceptLoadError):
    """Raised when metadata declares a different type than the loader expects."""
    pass


class InvalidReferenceError(FaberError, ValueError):
    """Raised when a ``type:name`` concept reference cannot be parsed."""
    pass


class ConfigError(FaberError):
    """Raised when project or overlay configuration is invalid."""
    pass


class UnsupportedConfigFormatError(ConfigError):
    """Raised when a config file has an extension we cannot parse."""
    pass


class MCPServerConfigError(ConfigError):
    """Raised when an MCP server declares both or neither of command/url."""
    pass


class BindingError(FaberError):
    """Base class for binding failures."""
    pass


class BindingConfigError(BindingError):
    """Raised when a binding configuration is missing required fields."""
    pass


class TemplateLoadError(BindingError):
    """Raised when a binding template cannot be loaded or compiled."""
    pass


class UnsupportedFrameworkError(BindingError):
    """Raised when no binding is registered for a framework name."""
    pass


class UnsupportedConceptError(BindingError):
    """Raised when a binding cannot transform the given concept type."""
    pass


__all__ = [
    "FaberError",
    "ConceptLoadError",
    "NotFoundError",
    "MetadataMissingError",
    "MetadataParseError",
    "TypeMismatchError",
    "InvalidReferenceError",
    "ConfigError",
    "UnsupportedConfigFormatError",
    "MCPServerConfigError",
    "BindingError",
    "BindingConfigError",
    "TemplateLoadError",
    "UnsupportedFrameworkError",
    "UnsupportedConceptError",
]
