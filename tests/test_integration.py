"""Integration tests for realistic vibe-code workflows."""

import json
import os
from pathlib import Path
from tempfile import TemporaryDirectory

from vibe_code import ConfigManager
from vibe_code import ConfigPaths
from vibe_code import Mode
from vibe_code import Scope
from vibe_code import build_claude_md
from vibe_code import needs_regeneration
from vibe_code import switch_mode
from vibe_code.builder import get_claude_md_path


class TestVibeIntegration:
    """Integration tests for realistic configuration scenarios."""

    def test_realistic_workflow_init_then_switch(self, manager, project_root, temp_paths):
        """Test initializing a project and switching to learning mode."""
        # 1. Developer initializes in guided mode
        manager.init_project(mode=Mode.GUIDED)
        build_claude_md(manager.load_config().unwrap(), project_root).unwrap()
        assert "# Guided Mode" in get_claude_md_path(project_root).read_text()

        # 2. Developer switches to learning mode
        outcome = switch_mode(manager, Mode.LEARNING).unwrap()
        assert outcome.previous_mode == Mode.GUIDED
        assert outcome.new_mode == Mode.LEARNING

        # 3. Both the persisted config and the document reflect the new mode
        assert json.loads(temp_paths.project.read_text())["mode"] == "learning"
        content = get_claude_md_path(project_root).read_text()
        assert "# Learning Mode" in content
        assert "# Guided Mode" not in content

    def test_realistic_workflow_global_default(self, manager):
        """Test a global default mode applies until the project overrides it."""
        # 1. User prefers expert mode everywhere
        manager.update_settings({"defaultMode": "expert"}, scope=Scope.GLOBAL)
        assert manager.load_config().value.mode == Mode.EXPERT

        # 2. Project is initialized with an explicit mode
        manager.init_project(mode=Mode.LEARNING)
        assert manager.load_config().value.mode == Mode.LEARNING

        # 3. Global still holds the user's preference
        assert manager.read_global_config().value.default_mode == Mode.EXPERT

    def test_realistic_workflow_team_settings(self, manager, project_root):
        """Test project settings layer over a user's global preferences."""
        # 1. User sets global editor and standards
        manager.update_settings(
            {"editor": "vim", "includeStandards": ["typescript", "api"]},
            scope=Scope.GLOBAL,
        )

        # 2. Team project narrows standards and adds a stricter checklist
        manager.init_project(include_standards=["api"], include_security_checklist="full")

        config = manager.load_config().unwrap()
        assert config.editor == "vim"
        assert config.include_standards == ["api"]
        assert config.include_security_checklist == "full"

        # 3. Generated document carries the project's choices
        content = build_claude_md(config, project_root).unwrap().read_text()
        assert "# API Design Standards" in content
        assert "# TypeScript Standards" not in content

    def test_config_change_marks_document_stale(self, manager, project_root):
        """Test editing the config after a build makes CLAUDE.md stale."""
        manager.init_project()
        document = build_claude_md(manager.load_config().unwrap(), project_root).unwrap()
        assert not needs_regeneration(project_root)

        manager.update_settings({"projectName": "shop"})
        # Force a strictly newer config timestamp
        stat = document.stat()
        config_path = manager.scope_to_path(Scope.PROJECT)
        os.utime(config_path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000))
        assert needs_regeneration(project_root)

        build_claude_md(manager.load_config().unwrap(), project_root)
        assert "# Project: shop" in document.read_text()

    def test_paths_injection_different_locations(self):
        """Test that different path configurations work correctly."""
        with TemporaryDirectory() as tmpdir:
            tmpdir_path = Path(tmpdir)
            custom_paths = ConfigPaths(
                user=tmpdir_path / "custom" / "user-config.json",
                project=tmpdir_path / "custom" / "project.json",
            )

            manager = ConfigManager(tmpdir_path / "repo", paths=custom_paths)

            # Operations should work with custom paths
            manager.update_settings({"editor": "code"}, scope=Scope.GLOBAL)
            manager.init_project(mode=Mode.EXPERT)

            assert custom_paths.user.exists()
            assert custom_paths.project.exists()
            assert manager.load_config().value.mode == Mode.EXPERT
