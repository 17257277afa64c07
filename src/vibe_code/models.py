"""Data models for vibe-code."""

from dataclasses import dataclass
from enum import Enum
from enum import IntEnum
from pathlib import Path
from typing import Any
from typing import Generic
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator

from .exceptions import ConfigValidationError
from .exceptions import VibeError

VIBE_DIR = ".vibe"
CONFIG_FILE = "config.json"


class Mode(str, Enum):
    """Behavioral preset selecting which prompt text goes into CLAUDE.md."""

    LEARNING = "learning"
    GUIDED = "guided"
    EXPERT = "expert"


class ChecklistType(str, Enum):
    """Security checklist included in CLAUDE.md."""

    PRE = "pre"
    POST = "post"
    OWASP = "owasp"
    API = "api"
    FULL = "full"
    NONE = "none"


class StandardType(str, Enum):
    """Coding standards included in CLAUDE.md."""

    TYPESCRIPT = "typescript"
    API = "api"


class Scope(Enum):
    """Configuration scope enumeration.

    Determines which config file to target for write operations.
    """

    GLOBAL = "global"
    PROJECT = "project"


class ExitCode(IntEnum):
    """CLI exit codes."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENT = 2
    CONFIG_ERROR = 3
    NOT_FOUND = 4
    PERMISSION_DENIED = 5


@dataclass(frozen=True)
class ConfigPaths:
    """Paths to the two configuration scopes.

    Attributes:
        user: Path to the user-global config file
        project: Path to the project config file; its existence marks the
            project as initialized
    """

    user: Path
    project: Path

    @classmethod
    def for_project(cls, root: Path | str, home: Path | None = None) -> "ConfigPaths":
        """Derive the standard config locations for a project root.

        Args:
            root: Project root directory
            home: User home directory (defaults to ``Path.home()``)

        Returns:
            ConfigPaths pointing at ``<home>/.vibe/config.json`` and
            ``<root>/.vibe/config.json``
        """
        home = home if home is not None else Path.home()
        return cls(
            user=home / VIBE_DIR / CONFIG_FILE,
            project=Path(root).resolve() / VIBE_DIR / CONFIG_FILE,
        )


def _unique(values: list[Any]) -> list[Any]:
    return list(dict.fromkeys(values))


class GlobalConfig(BaseModel):
    """User-wide defaults stored in ~/.vibe/config.json."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    default_mode: Mode = Field(default=Mode.GUIDED, alias="defaultMode")
    editor: str | None = None
    claude_code_path: str | None = Field(default=None, alias="claudeCodePath")
    include_security_checklist: ChecklistType = Field(default=ChecklistType.PRE, alias="includeSecurityChecklist")
    include_standards: list[StandardType] = Field(
        default_factory=lambda: [StandardType.TYPESCRIPT], alias="includeStandards"
    )

    @field_validator("include_standards")
    @classmethod
    def _dedupe_standards(cls, value: list[StandardType]) -> list[StandardType]:
        return _unique(value)


class ProjectConfig(BaseModel):
    """Per-project overrides stored in <root>/.vibe/config.json.

    Every field is optional; absence means "inherit".
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mode: Mode | None = None
    project_name: str | None = Field(default=None, alias="projectName")
    template: str | None = None
    custom_prompts: list[str] | None = Field(default=None, alias="customPrompts")
    include_security_checklist: ChecklistType | None = Field(default=None, alias="includeSecurityChecklist")
    include_standards: list[StandardType] | None = Field(default=None, alias="includeStandards")

    @field_validator("include_standards")
    @classmethod
    def _dedupe_standards(cls, value: list[StandardType] | None) -> list[StandardType] | None:
        return None if value is None else _unique(value)


class MergedConfig(BaseModel):
    """Effective configuration after merging project, global and defaults.

    Derived on every load, never persisted.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mode: Mode
    editor: str | None = None
    claude_code_path: str | None = Field(default=None, alias="claudeCodePath")
    project_name: str | None = Field(default=None, alias="projectName")
    template: str | None = None
    custom_prompts: list[str] = Field(alias="customPrompts")
    include_security_checklist: ChecklistType = Field(alias="includeSecurityChecklist")
    include_standards: list[StandardType] = Field(alias="includeStandards")


DEFAULT_CONFIG = MergedConfig(
    mode=Mode.GUIDED,
    custom_prompts=[],
    include_security_checklist=ChecklistType.PRE,
    include_standards=[StandardType.TYPESCRIPT],
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_model(model: type[ModelT], data: Any, source: str | Path | None = None) -> ModelT:
    """Validate untrusted data against a config schema.

    Args:
        model: Schema class to validate against
        data: Parsed JSON (or keyword data) to validate
        source: Optional file path used in the error message

    Returns:
        Validated model instance

    Raises:
        ConfigValidationError: If data does not match the schema
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()
        )
        where = f" in {source}" if source is not None else ""
        raise ConfigValidationError(f"Invalid configuration{where}: {problems}") from e


def dump_model(model: BaseModel) -> dict[str, Any]:
    """Serialize a config model to its persisted JSON shape (camelCase, unset fields omitted)."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation that can fail: a value or an error, never both.

    Failures are returned, not raised, across module boundaries so that every
    call site handles them explicitly.
    """

    value: T | None = None
    error: VibeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: VibeError) -> "Result[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
