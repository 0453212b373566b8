import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'faber' and tests/ importable for 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from faber.core.audit import reset_stdlib_logging_for_tests
from faber.core.project import FaberProject


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch):
    """Empty project root; cwd moves into it for the duration of the test."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def initialized_project(isolated_project_env) -> FaberProject:
    """A project created by ``init`` (with the example role)."""
    project = FaberProject(isolated_project_env)
    project.init_project()
    return project


