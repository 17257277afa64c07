"""vibe-code: security-first wrapper for Claude Code.

This package configures and launches Claude Code with a generated CLAUDE.md
built from prompt presets selected by a mode:
- learning: Maximum explanation, beginner-friendly
- guided: Brick-by-brick with approval gates
- expert: Fast execution with security defaults

Configuration lives in two scopes:
- Global (~/.vibe/config.json): user-wide defaults
- Project (.vibe/config.json): per-project overrides; its existence marks
  the project as initialized

Public API:
    ConfigManager: Read, write and merge configuration for a project
    ConfigPaths: Dataclass defining paths to both config scopes
    GlobalConfig, ProjectConfig, MergedConfig: Configuration schemas
    Mode, ChecklistType, StandardType, Scope: Enumerations
    Result: Success-or-failure value returned by operations that can fail
    merge_configs, apply_patch: Pure config helpers
    parse_mode, format_mode, format_all_modes, suggest_mode: Mode registry
    switch_mode: Persist a new mode and regenerate CLAUDE.md
    needs_regeneration: Check whether CLAUDE.md is stale
    build_claude_md: Write CLAUDE.md from a merged config
    VibeError, ConfigError, ConfigFileError, ConfigValidationError,
    NotInitializedError, DocumentError, LaunchError: Exception types

Example:
    ```python
    from vibe_code import ConfigManager, Mode, switch_mode

    manager = ConfigManager(".")
    if not manager.is_project_initialized():
        manager.init_project(mode=Mode.GUIDED)

    result = switch_mode(manager, Mode.EXPERT)
    if result.ok:
        print(result.value.previous_mode, "->", result.value.new_mode)
    else:
        print(result.error)
    ```
"""

__version__ = "0.1.0"

from .builder import build_claude_md
from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import ConfigValidationError
from .exceptions import DocumentError
from .exceptions import LaunchError
from .exceptions import NotInitializedError
from .exceptions import VibeError
from .manager import ConfigManager
from .models import ChecklistType
from .models import ConfigPaths
from .models import GlobalConfig
from .models import MergedConfig
from .models import Mode
from .models import ProjectConfig
from .models import Result
from .models import Scope
from .models import StandardType
from .modes import format_all_modes
from .modes import format_mode
from .modes import parse_mode
from .modes import suggest_mode
from .staleness import needs_regeneration
from .switcher import switch_mode
from .utils import apply_patch
from .utils import merge_configs

__all__ = [
    "ConfigManager",
    "ConfigPaths",
    "GlobalConfig",
    "ProjectConfig",
    "MergedConfig",
    "Mode",
    "ChecklistType",
    "StandardType",
    "Scope",
    "Result",
    "merge_configs",
    "apply_patch",
    "parse_mode",
    "format_mode",
    "format_all_modes",
    "suggest_mode",
    "switch_mode",
    "needs_regeneration",
    "build_claude_md",
    "VibeError",
    "ConfigError",
    "ConfigFileError",
    "ConfigValidationError",
    "NotInitializedError",
    "DocumentError",
    "LaunchError",
]
