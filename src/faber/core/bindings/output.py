"""Artifact materialization."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

from faber.core.utils.io import ensure_directory, write_text

from .artifact import DeploymentArtifact

logger = logging.getLogger(__name__)


class ArtifactWriter:
    """Write a DeploymentArtifact under a base directory.

    Every directory is created first, then every file is written verbatim as
    UTF-8. Relative artifact paths resolve against ``base_dir``.
    """

    def __init__(self, base_dir: Union[str, Path]) -> None:
        self.base_dir = Path(base_dir)

    def _resolve_path(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.base_dir / path

    def write(self, artifact: DeploymentArtifact) -> List[Path]:
        for directory in artifact.directories:
            ensure_directory(self._resolve_path(directory))
        written = [self._resolve_path(path) for path in artifact.files]
        for target, content in zip(written, artifact.files.values()):
            write_text(target, content)
        logger.info("Wrote %d files under %s", len(written), self.base_dir)
        return written


def write_artifact(artifact: DeploymentArtifact, output_dir: Union[str, Path]) -> List[Path]:
    """Materialize ``artifact`` under ``output_dir``; returns the written paths."""
    return ArtifactWriter(output_dir).write(artifact)


__all__ = ["ArtifactWriter", "write_artifact"]
