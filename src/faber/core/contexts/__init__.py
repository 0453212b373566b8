"""Contexts: categorized knowledge documents attached to roles and overlays."""
from __future__ import annotations

from .loader import ContextLoader
from .models import CATEGORY_PRIORITY, UNRANKED_PRIORITY, Context, ContextCategory, context_key
from .resolver import (
    SPECIALIST_KEYWORDS,
    ContextResolver,
    filter_by_category,
    group_by_category,
    merge_contexts,
    required_tools,
    requires_mcp_server,
    sort_by_priority,
)

__all__ = [
    "CATEGORY_PRIORITY",
    "UNRANKED_PRIORITY",
    "Context",
    "ContextCategory",
    "context_key",
    "ContextLoader",
    "ContextResolver",
    "SPECIALIST_KEYWORDS",
    "filter_by_category",
    "group_by_category",
    "merge_contexts",
    "required_tools",
    "requires_mcp_server",
    "sort_by_priority",
]
