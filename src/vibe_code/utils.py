"""Utility functions for vibe-code."""

from collections.abc import Mapping
from typing import Any

from .exceptions import ConfigValidationError
from .models import DEFAULT_CONFIG
from .models import GlobalConfig
from .models import MergedConfig
from .models import ModelT
from .models import ProjectConfig
from .models import validate_model


def merge_configs(global_config: GlobalConfig, project: ProjectConfig | None) -> MergedConfig:
    """Merge global and project configuration into the effective config.

    Field precedence:
    - mode: project, then global default mode
    - editor, claude_code_path: global only (machine-specific)
    - project_name, template, custom_prompts: project only
    - include_security_checklist, include_standards: project, then global,
      then the hardcoded default

    Args:
        global_config: User-wide configuration
        project: Project configuration, or None if the project is not initialized

    Returns:
        New MergedConfig with every required field resolved (inputs are not modified)

    Examples:
        >>> merge_configs(GlobalConfig(defaultMode="expert"), None).mode
        <Mode.EXPERT: 'expert'>

        >>> merge_configs(GlobalConfig(defaultMode="expert"), ProjectConfig(mode="learning")).mode
        <Mode.LEARNING: 'learning'>
    """
    project = project if project is not None else ProjectConfig()

    checklist = project.include_security_checklist
    if checklist is None:
        checklist = global_config.include_security_checklist
    if checklist is None:
        checklist = DEFAULT_CONFIG.include_security_checklist

    standards = project.include_standards
    if standards is None:
        standards = global_config.include_standards
    if standards is None:
        standards = DEFAULT_CONFIG.include_standards

    custom_prompts = project.custom_prompts
    if custom_prompts is None:
        custom_prompts = DEFAULT_CONFIG.custom_prompts

    return MergedConfig(
        mode=project.mode if project.mode is not None else global_config.default_mode,
        editor=global_config.editor,
        claude_code_path=global_config.claude_code_path,
        project_name=project.project_name,
        template=project.template,
        # Copies, so the merged config never aliases an input's lists
        custom_prompts=list(custom_prompts),
        include_security_checklist=checklist,
        include_standards=list(standards),
    )


def apply_patch(record: ModelT, updates: Mapping[str, Any]) -> ModelT:
    """Apply named field updates to a full config record.

    The prior record is left untouched; a new record of the same type is
    validated and returned, so persistence stays full-record while the
    update is partial-field.

    Args:
        record: Existing full record
        updates: Field updates keyed by field name or JSON alias

    Returns:
        New validated record with the updates applied

    Raises:
        ConfigValidationError: If a key is not a field of the record or a
            value fails validation

    Examples:
        >>> apply_patch(ProjectConfig(mode="learning", projectName="foo"), {"mode": "guided"}).project_name
        'foo'
    """
    model = type(record)
    aliases = {field.alias: name for name, field in model.model_fields.items() if field.alias}

    data = record.model_dump()
    for key, value in updates.items():
        name = aliases.get(key, key)
        if name not in model.model_fields:
            raise ConfigValidationError(f"Unknown configuration key: {key}")
        data[name] = value

    return validate_model(model, data)
