"""Tests for the Claude Code launcher."""

import signal
import stat

import pytest
from vibe_code import LaunchError
from vibe_code.launcher import find_claude_code
from vibe_code.launcher import run_claude_code


@pytest.fixture
def fake_claude(tmp_path):
    """Create an executable shell script standing in for Claude Code."""

    def make(body):
        script = tmp_path / "claude"
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return make


class TestFindClaudeCode:
    """Test find_claude_code."""

    def test_custom_path(self, fake_claude):
        script = fake_claude("exit 0")
        result = find_claude_code(str(script))
        assert result.ok
        assert result.value == str(script.resolve())

    def test_custom_path_missing(self, tmp_path):
        result = find_claude_code(str(tmp_path / "nope"))
        assert not result.ok
        assert isinstance(result.error, LaunchError)

    def test_custom_path_not_executable(self, tmp_path):
        script = tmp_path / "claude"
        script.write_text("#!/bin/sh\n")
        script.chmod(0o644)
        assert not find_claude_code(str(script)).ok

    def test_on_path(self, fake_claude, monkeypatch):
        script = fake_claude("exit 0")
        monkeypatch.setenv("PATH", str(script.parent))
        result = find_claude_code()
        assert result.ok
        assert result.value == "claude"

    def test_not_on_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PATH", str(tmp_path / "empty"))
        result = find_claude_code()
        assert not result.ok
        assert "--claude-path" in str(result.error)


class TestRunClaudeCode:
    """Test run_claude_code."""

    def test_exit_code_forwarded(self, fake_claude):
        script = fake_claude("exit 7")
        result = run_claude_code(claude_path=str(script))
        assert result.ok
        assert result.value == 7

    def test_cwd_args_and_env(self, fake_claude, tmp_path):
        """Test the child runs in cwd with args and merged env."""
        out = tmp_path / "out.txt"
        script = fake_claude(f'echo "$(pwd) $1 $VIBE_TEST" > {out}')
        workdir = tmp_path / "work"
        workdir.mkdir()

        result = run_claude_code(claude_path=str(script), cwd=workdir, args=["--resume"], env={"VIBE_TEST": "yes"})

        assert result.ok
        assert result.value == 0
        assert out.read_text().split() == [str(workdir.resolve()), "--resume", "yes"]

    def test_killed_by_signal(self, fake_claude):
        """Test a signal death maps to 128 + signal number."""
        script = fake_claude("kill -TERM $$")
        result = run_claude_code(claude_path=str(script))
        assert result.value == 128 + signal.SIGTERM

    def test_signal_handlers_restored(self, fake_claude):
        before = signal.getsignal(signal.SIGTERM)
        run_claude_code(claude_path=str(fake_claude("exit 0")))
        assert signal.getsignal(signal.SIGTERM) == before

    def test_missing_executable(self, tmp_path):
        result = run_claude_code(claude_path=str(tmp_path / "nope"))
        assert not result.ok
        assert isinstance(result.error, LaunchError)
