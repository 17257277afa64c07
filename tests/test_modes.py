"""Tests for the mode registry."""

import pytest
from vibe_code import ConfigValidationError
from vibe_code import NotInitializedError
from vibe_code.models import Mode
from vibe_code.modes import AVAILABLE_MODES
from vibe_code.modes import MODE_INFO
from vibe_code.modes import compare_modes
from vibe_code.modes import format_all_modes
from vibe_code.modes import format_mode
from vibe_code.modes import get_current_mode
from vibe_code.modes import get_mode_info
from vibe_code.modes import is_valid_mode
from vibe_code.modes import parse_mode
from vibe_code.modes import suggest_mode


class TestParseMode:
    """Test parse_mode function."""

    @pytest.mark.parametrize("value", ["learning", "guided", "expert"])
    def test_valid(self, value):
        result = parse_mode(value)
        assert result.ok
        assert result.value == Mode(value)

    @pytest.mark.parametrize("value", ["Learning", "", "LEARNING", " guided", "guided ", "beginner"])
    def test_invalid(self, value):
        """Test parsing is exact: no case folding, trimming or aliases."""
        result = parse_mode(value)
        assert not result.ok
        assert isinstance(result.error, ConfigValidationError)
        assert "learning, guided, expert" in str(result.error)

    def test_is_valid_mode(self):
        assert is_valid_mode("expert")
        assert is_valid_mode(Mode.EXPERT)
        assert not is_valid_mode(None)
        assert not is_valid_mode(1)


class TestFormatting:
    """Test display helpers."""

    def test_format_mode(self):
        assert format_mode(Mode.LEARNING) == "📚 Learning"
        assert format_mode(Mode.GUIDED) == "🧱 Guided"
        assert format_mode(Mode.EXPERT) == "⚡ Expert"

    def test_format_all_modes(self):
        """Test every mode is listed in order, none marked current."""
        lines = format_all_modes().splitlines()
        assert len(lines) == 3
        for line, mode in zip(lines, AVAILABLE_MODES):
            assert mode.value in line
            assert MODE_INFO[mode].description in line
        assert "(current)" not in "\n".join(lines)

    def test_format_all_modes_marks_current(self):
        lines = format_all_modes(Mode.EXPERT).splitlines()
        assert lines[2].endswith("(current)")
        assert not lines[0].endswith("(current)")

    def test_get_mode_info(self):
        assert get_mode_info(Mode.GUIDED).name == "Guided"

    def test_compare_modes(self):
        table = compare_modes()
        assert table.startswith("Mode Comparison:")
        assert "Approval Gates" in table


class TestSuggestMode:
    """Test suggest_mode decision table."""

    def test_default(self):
        assert suggest_mode() == Mode.GUIDED

    def test_new_to_security_has_priority(self):
        assert suggest_mode(is_new_to_security=True, needs_review=True, wants_speed=True) == Mode.LEARNING

    def test_needs_review_before_speed(self):
        assert suggest_mode(needs_review=True, wants_speed=True) == Mode.GUIDED

    def test_wants_speed(self):
        assert suggest_mode(wants_speed=True) == Mode.EXPERT


class TestGetCurrentMode:
    """Test get_current_mode."""

    def test_not_initialized(self, manager):
        result = get_current_mode(manager)
        assert not result.ok
        assert isinstance(result.error, NotInitializedError)

    def test_initialized(self, manager):
        manager.init_project(mode=Mode.LEARNING)
        assert get_current_mode(manager).value == Mode.LEARNING
