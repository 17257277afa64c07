"""Configuration manager for the global/project config store."""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .models import CONFIG_FILE
from .models import DEFAULT_CONFIG
from .models import VIBE_DIR
from .models import ConfigPaths
from .models import GlobalConfig
from .models import MergedConfig
from .models import Mode
from .models import ModelT
from .models import ProjectConfig
from .models import Result
from .models import Scope
from .models import dump_model
from .models import validate_model
from .utils import apply_patch
from .utils import merge_configs

logger = logging.getLogger(__name__)


def get_global_config_path(home: Path | None = None) -> Path:
    """Get the global config file path (``~/.vibe/config.json``)."""
    home = home if home is not None else Path.home()
    return home / VIBE_DIR / CONFIG_FILE


def get_project_config_path(root: Path | str) -> Path:
    """Get the project config file path (``<root>/.vibe/config.json``)."""
    return Path(root).resolve() / VIBE_DIR / CONFIG_FILE


class ConfigManager:
    """Manages configuration for one project across global/project scopes.

    Resolution order (highest to lowest priority):
    1. Project settings (<root>/.vibe/config.json)
    2. Global settings (~/.vibe/config.json)
    3. Built-in defaults

    Every public read/write returns a Result; file, JSON and schema errors
    are converted to ConfigError failures here and never raised past this
    class. Nothing is cached: each call reads from disk.

    Args:
        project_root: Project root directory
        paths: Config file paths (defaults to the standard locations)
    """

    def __init__(self, project_root: Path | str, paths: ConfigPaths | None = None):
        """Initialize configuration manager.

        Args:
            project_root: Project root directory
            paths: ConfigPaths defining where config files are located
        """
        self.project_root = Path(project_root).resolve()
        self.paths = paths if paths is not None else ConfigPaths.for_project(self.project_root)

    # ===== Global Config =====

    def read_global_config(self) -> Result[GlobalConfig]:
        """Read global configuration.

        Returns:
            Success with the schema defaults if the file doesn't exist,
            success with the parsed config if valid, failure otherwise
        """
        if not self.paths.user.exists():
            logger.debug(f"No global config at {self.paths.user}, using defaults")
            return Result.success(GlobalConfig())
        return self._read_json(self.paths.user, GlobalConfig)

    def write_global_config(self, config: GlobalConfig | Mapping[str, Any]) -> Result[GlobalConfig]:
        """Validate and write global configuration.

        Args:
            config: GlobalConfig or raw mapping to validate

        Returns:
            Success with the written config, or failure
        """
        return self._write_json(self.paths.user, GlobalConfig, config)

    # ===== Project Config =====

    def read_project_config(self) -> Result[ProjectConfig | None]:
        """Read project configuration.

        Returns:
            Success with None if the project is not initialized, success with
            the parsed config if valid, failure otherwise
        """
        if not self.paths.project.exists():
            logger.debug(f"No project config at {self.paths.project}")
            return Result.success(None)
        return self._read_json(self.paths.project, ProjectConfig)

    def write_project_config(self, config: ProjectConfig | Mapping[str, Any]) -> Result[ProjectConfig]:
        """Validate and write project configuration.

        Args:
            config: ProjectConfig or raw mapping to validate

        Returns:
            Success with the written config, or failure
        """
        return self._write_json(self.paths.project, ProjectConfig, config)

    def is_project_initialized(self) -> bool:
        """Check whether the project config file exists (content is not validated)."""
        return self.paths.project.exists()

    def init_project(self, **options: Any) -> Result[ProjectConfig]:
        """Initialize the project with a full default configuration.

        Args:
            **options: ProjectConfig field overrides (mode, project_name,
                template, custom_prompts, include_security_checklist,
                include_standards)

        Returns:
            Success with the written config, or failure
        """
        data: dict[str, Any] = {
            "mode": DEFAULT_CONFIG.mode,
            "custom_prompts": [],
            "include_security_checklist": DEFAULT_CONFIG.include_security_checklist,
            "include_standards": list(DEFAULT_CONFIG.include_standards),
        }
        data.update({key: value for key, value in options.items() if value is not None})

        result = self.write_project_config(data)
        if result.ok:
            logger.info(f"Initialized project at {self.project_root}")
        return result

    # ===== Merged Config =====

    def load_config(self) -> Result[MergedConfig]:
        """Load the effective configuration (project > global > defaults)."""
        global_result = self.read_global_config()
        if not global_result.ok:
            return Result.failure(global_result.error)

        project_result = self.read_project_config()
        if not project_result.ok:
            return Result.failure(project_result.error)

        return Result.success(merge_configs(global_result.value, project_result.value))

    # ===== Partial Updates =====

    def update_settings(self, updates: Mapping[str, Any], scope: Scope = Scope.PROJECT) -> Result[BaseModel]:
        """Apply field updates to the config at the given scope.

        Reads the current record, applies the updates and rewrites the whole
        file. Fields not named in ``updates`` are preserved.

        Args:
            updates: Field updates keyed by field name or JSON alias
            scope: Target scope (default: PROJECT)

        Returns:
            Success with the written config, or failure
        """
        if scope is Scope.GLOBAL:
            current: Result[Any] = self.read_global_config()
            empty: BaseModel = GlobalConfig()
        else:
            current = self.read_project_config()
            empty = ProjectConfig()
        if not current.ok:
            return Result.failure(current.error)

        try:
            updated = apply_patch(current.value if current.value is not None else empty, updates)
        except ConfigError as e:
            return Result.failure(e)

        result = self._write_json(self.scope_to_path(scope), type(updated), updated)
        if result.ok:
            logger.info(f"Updated {scope.value} config: {', '.join(updates)}")
        return result

    def update_mode(self, mode: Mode) -> Result[ProjectConfig]:
        """Set the mode in project config, preserving all other fields."""
        return self.update_settings({"mode": mode}, scope=Scope.PROJECT)

    def scope_to_path(self, scope: Scope) -> Path:
        """Get the config file path for a given scope."""
        scope_map = {
            Scope.GLOBAL: self.paths.user,
            Scope.PROJECT: self.paths.project,
        }
        return scope_map[scope]

    # ===== Private Helpers =====

    def _read_json(self, path: Path, model: type[ModelT]) -> Result[ModelT]:
        """Read and validate a JSON config file.

        Args:
            path: Path to JSON file
            model: Schema to validate against

        Returns:
            Success with the validated model, or failure with ConfigError
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            return Result.failure(ConfigFileError(f"Invalid JSON in {path}: {e}"))
        except OSError as e:
            return Result.failure(ConfigFileError(f"Failed to read configuration from {path}: {e}"))

        try:
            return Result.success(validate_model(model, data, source=path))
        except ConfigError as e:
            return Result.failure(e)

    def _write_json(self, path: Path, model: type[ModelT], data: BaseModel | Mapping[str, Any]) -> Result[ModelT]:
        """Validate and write a JSON config file.

        Output is indented by two spaces with a trailing newline. The write is
        not atomic.

        Args:
            path: Path to JSON file
            model: Schema to validate against before writing
            data: Model or mapping to write

        Returns:
            Success with the validated model, or failure with ConfigError
        """
        try:
            raw = data.model_dump() if isinstance(data, BaseModel) else data
            validated = validate_model(model, raw)
        except ConfigError as e:
            return Result.failure(e)

        try:
            # Ensure directory exists
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(json.dumps(dump_model(validated), indent=2) + "\n")
        except OSError as e:
            return Result.failure(ConfigFileError(f"Failed to write configuration to {path}: {e}"))

        logger.debug(f"Wrote configuration to {path}")
        return Result.success(validated)
