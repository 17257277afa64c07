"""Shared fixtures."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from vibe_code import ConfigManager
from vibe_code import ConfigPaths


@pytest.fixture
def temp_paths():
    """Create temporary home and project config paths."""
    with TemporaryDirectory() as tmpdir:
        tmpdir_path = Path(tmpdir).resolve()
        yield ConfigPaths(
            user=tmpdir_path / "home" / ".vibe" / "config.json",
            project=tmpdir_path / "project" / ".vibe" / "config.json",
        )


@pytest.fixture
def project_root(temp_paths):
    root = temp_paths.project.parent.parent
    root.mkdir(parents=True, exist_ok=True)
    return root


@pytest.fixture
def manager(temp_paths, project_root):
    """Create ConfigManager for the temporary project."""
    return ConfigManager(project_root, paths=temp_paths)
