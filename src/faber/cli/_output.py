"""CLI output formatting (text or JSON)."""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional, Union


class OutputFormatter:
    """Unified output formatter for CLI commands.

    Results go to stdout; errors go to stderr in both modes.
    """

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(self, data: Dict[str, Any], message: str, *, status: str = "success") -> None:
        if self.json_mode:
            self.json_output({"status": status, **data})
        else:
            print(message)

    def error(
        self,
        error: Union[Exception, str],
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        msg = message or str(error)
        if self.json_mode:
            print(json.dumps({"error": error_code, "message": msg}, indent=self.indent), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(format_json(data, self.indent))

    def text(self, message: str) -> None:
        if not self.json_mode:
            print(message)

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")


def format_json(data: Any, indent: int = 2) -> str:
    return json.dumps(data, indent=indent, default=str)


__all__ = ["OutputFormatter", "format_json"]
