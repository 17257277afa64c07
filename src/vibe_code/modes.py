"""Mode registry: display metadata and helpers for the three modes.

Available modes:
- learning: Maximum explanation, beginner-friendly
- guided: Brick-by-brick with approval gates
- expert: Fast execution with security defaults
"""

from dataclasses import dataclass
from typing import Any

from .exceptions import ConfigValidationError
from .exceptions import NotInitializedError
from .manager import ConfigManager
from .models import Mode
from .models import Result


@dataclass(frozen=True)
class ModeInfo:
    """Display metadata for a mode."""

    name: str
    description: str
    icon: str


MODE_INFO: dict[Mode, ModeInfo] = {
    Mode.LEARNING: ModeInfo(
        name="Learning",
        description="Maximum explanation, beginner-friendly. Explains concepts and shows examples.",
        icon="📚",
    ),
    Mode.GUIDED: ModeInfo(
        name="Guided",
        description="Brick-by-brick methodology. Plans before building, requires approval at each step.",
        icon="🧱",
    ),
    Mode.EXPERT: ModeInfo(
        name="Expert",
        description="Speed mode for experienced developers. Concise output, security baked in silently.",
        icon="⚡",
    ),
}

# Recommended order
AVAILABLE_MODES: list[Mode] = [Mode.LEARNING, Mode.GUIDED, Mode.EXPERT]


def is_valid_mode(value: Any) -> bool:
    """Check whether value is exactly one of the mode identifiers."""
    return isinstance(value, str) and any(value == mode.value for mode in AVAILABLE_MODES)


def parse_mode(value: str) -> Result[Mode]:
    """Parse a mode string.

    Matching is exact: case-sensitive, no trimming, no aliases.

    Args:
        value: Raw mode string

    Returns:
        Success with the Mode, or failure listing the valid modes
    """
    if is_valid_mode(value):
        return Result.success(Mode(value))
    valid = ", ".join(mode.value for mode in AVAILABLE_MODES)
    return Result.failure(ConfigValidationError(f'Invalid mode: "{value}". Valid modes: {valid}'))


def get_mode_info(mode: Mode) -> ModeInfo:
    """Get display metadata for a mode."""
    return MODE_INFO[mode]


def format_mode(mode: Mode) -> str:
    """Format mode for display (icon and name)."""
    info = MODE_INFO[mode]
    return f"{info.icon} {info.name}"


def format_all_modes(current_mode: Mode | None = None) -> str:
    """Format all modes with descriptions, one per line, marking the current one."""
    lines = []
    for mode in AVAILABLE_MODES:
        info = MODE_INFO[mode]
        current = " (current)" if mode == current_mode else ""
        lines.append(f"  {info.icon} {mode.value:<10} - {info.description}{current}")
    return "\n".join(lines)


def compare_modes() -> str:
    """Render a side-by-side comparison table of the modes."""
    rows = [
        ["Feature", "Learning", "Guided", "Expert"],
        ["─" * 15, "─" * 12, "─" * 12, "─" * 12],
        ["Explanations", "Detailed", "Moderate", "Minimal"],
        ["Code Comments", "Heavy", "Moderate", "Essential only"],
        ["Approval Gates", "No", "Yes", "No"],
        ["Planning", "Inline", "Brick plan", "Implicit"],
        ["Speed", "Slower", "Moderate", "Fast"],
        ["Best For", "Learning", "Teams/Review", "Experienced"],
    ]
    table = "\n".join(
        " ".join(cell.ljust(15 if i == 0 else 12) for i, cell in enumerate(row)) for row in rows
    )
    return "Mode Comparison:\n" + "─" * 60 + "\n" + table


def suggest_mode(
    is_new_to_security: bool = False,
    needs_review: bool = False,
    wants_speed: bool = False,
) -> Mode:
    """Suggest a mode from user hints.

    Hints are checked in priority order: new to security, needs review,
    wants speed. Guided is the balanced fallback.
    """
    if is_new_to_security:
        return Mode.LEARNING
    if needs_review:
        return Mode.GUIDED
    if wants_speed:
        return Mode.EXPERT
    return Mode.GUIDED


def get_current_mode(manager: ConfigManager) -> Result[Mode]:
    """Get the effective mode for an initialized project."""
    if not manager.is_project_initialized():
        return Result.failure(NotInitializedError())

    config = manager.load_config()
    if not config.ok:
        return Result.failure(config.error)
    return Result.success(config.value.mode)
