from __future__ import annotations

from pathlib import Path

from faber.core.bindings import ArtifactWriter, DeploymentArtifact, DeploymentMetadata, write_artifact
from faber.core.concepts import ConceptReference
from faber.core.config import Config
from helpers import FIXED_TIME


def _artifact() -> DeploymentArtifact:
    return DeploymentArtifact(
        files={"agents/pm.md": "agent\n", "docs/pm/tasks/a.md": "A\n"},
        directories=["agents", "docs/pm/tasks", "docs/pm/empty"],
        metadata=DeploymentMetadata(
            concept=ConceptReference.parse("role:pm"),
            binding="claude-code",
            timestamp=FIXED_TIME,
            config=Config(),
        ),
    )


def test_writer_creates_directories_and_files(tmp_path: Path) -> None:
    written = write_artifact(_artifact(), tmp_path / "out")

    assert written == [tmp_path / "out" / "agents" / "pm.md", tmp_path / "out" / "docs" / "pm" / "tasks" / "a.md"]
    assert (tmp_path / "out" / "agents" / "pm.md").read_text(encoding="utf-8") == "agent\n"
    assert (tmp_path / "out" / "docs" / "pm" / "empty").is_dir()


def test_writer_overwrites_existing_files(tmp_path: Path) -> None:
    target = tmp_path / "agents" / "pm.md"
    target.parent.mkdir(parents=True)
    target.write_text("stale", encoding="utf-8")

    ArtifactWriter(tmp_path).write(_artifact())

    assert target.read_text(encoding="utf-8") == "agent\n"


def test_artifact_to_dict_lists_paths_by_default() -> None:
    data = _artifact().to_dict()
    assert data["files"] == ["agents/pm.md", "docs/pm/tasks/a.md"]
    assert data["metadata"]["timestamp"] == FIXED_TIME.isoformat()
    assert data["metadata"]["concept"] == "role:pm"
