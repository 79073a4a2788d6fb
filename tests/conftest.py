import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'devlink' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from devlink.core.stdlib_logging import reset_logging_for_tests
from helpers.projects import ComposerProject, RecordingExecutor, RecordingIO


@pytest.fixture(autouse=True)
def _reset_logging() -> None:
    """Drop any handler a CLI test installed on the devlink logger."""
    yield
    reset_logging_for_tests()


@pytest.fixture
def project(tmp_path: Path) -> ComposerProject:
    """Root project with an empty manifest and a lockfile."""
    return ComposerProject.create(tmp_path / "project")


@pytest.fixture
def executor() -> RecordingExecutor:
    """Executor that records commands and reports success."""
    return RecordingExecutor()


@pytest.fixture
def host_io() -> RecordingIO:
    """HostIO that records messages."""
    return RecordingIO()
