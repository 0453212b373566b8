"""Tool loader (``tools/<name>/tool.yml``)."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from faber.core.validation import ValidationIssue

from .base import BaseConceptLoader
from .models import ConceptMetadata, ConceptType, Tool

MCP_SERVER_TOOL_TYPE = "mcp-server"


class ToolLoader(BaseConceptLoader[Tool]):
    concept_type = ConceptType.TOOL

    def _build(self, concept_dir: Path, metadata: Dict[str, Any]) -> Tool:
        protocols = metadata.get("protocols")
        args = metadata.get("args")
        env = metadata.get("env")
        command = metadata.get("command")
        return Tool(
            metadata=ConceptMetadata.from_dict(metadata),
            path=concept_dir,
            tool_type=str(metadata.get("tool_type") or "utility"),
            mcp_server=bool(metadata.get("mcp_server", False)),
            protocols=[str(p) for p in protocols] if isinstance(protocols, list) else [],
            command=str(command) if command else None,
            args=[str(a) for a in args] if isinstance(args, list) else [],
            env={str(k): str(v) for k, v in env.items()} if isinstance(env, dict) else {},
        )

    def validate_specific(self, concept: Tool) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        if concept.mcp_server and not concept.command:
            issues.append(self.error("command", "MCP server tools must have a command"))
        if concept.tool_type == MCP_SERVER_TOOL_TYPE and not concept.mcp_server:
            issues.append(self.error("mcp_server", "Tool type mcp-server must have mcp_server: true"))
        return issues


__all__ = ["ToolLoader"]
