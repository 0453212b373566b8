from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from faber.core.utils.io import ensure_directory

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_FABER_HANDLER: Optional[logging.Handler] = None
_CONFIGURED_TARGET: Optional[str] = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_stdlib_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Install Faber's single root handler.

    Logs go to ``log_path`` when given, otherwise to stderr. stdout is never
    used so ``--json`` output stays machine-readable. Calling again with the
    same target only adjusts the level.
    """
    global _FABER_HANDLER, _CONFIGURED_TARGET

    target = str(Path(log_path).resolve()) if log_path else "<stderr>"
    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _FABER_HANDLER is not None and _CONFIGURED_TARGET == target:
        _FABER_HANDLER.setLevel(_level_from_name(level))
        return

    if _FABER_HANDLER is not None:
        root.removeHandler(_FABER_HANDLER)
        _FABER_HANDLER.close()
        _FABER_HANDLER = None

    if log_path:
        ensure_directory(Path(target).parent)
        handler: logging.Handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)

    _FABER_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handler installed by ``configure_stdlib_logging``."""
    global _FABER_HANDLER, _CONFIGURED_TARGET
    if _FABER_HANDLER is not None:
        logging.getLogger().removeHandler(_FABER_HANDLER)
        _FABER_HANDLER.close()
    _FABER_HANDLER = None
    _CONFIGURED_TARGET = None


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
