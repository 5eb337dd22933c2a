"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from tests.helpers.workspace_helpers import FakeWorkspace, make_executable


@pytest.fixture
def temp_project() -> Generator[Path, None, None]:
    """Create an empty temporary project directory."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir).resolve()


@pytest.fixture
def bin_dir() -> Generator[Path, None, None]:
    """A directory standing in for a PATH entry."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir).resolve()


@pytest.fixture
def workspace(temp_project: Path) -> FakeWorkspace:
    """Workspace with an empty PATH and no settings."""
    return FakeWorkspace(temp_project)


@pytest.fixture
def php_workspace(temp_project: Path, bin_dir: Path) -> FakeWorkspace:
    """Workspace whose PATH contains a php interpreter."""
    ws = FakeWorkspace(temp_project)
    ws.add_executable("php", make_executable(bin_dir / "php"))
    return ws


@pytest.fixture
def work_dir() -> Generator[Path, None, None]:
    """Directory downloaded adapters are cached in."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir).resolve()
