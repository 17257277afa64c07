"""Prompt catalog loaded from the YAML files shipped in this package.

Each catalog file maps a prompt id to an entry with ``name``,
``description``, ``version`` and ``body``.
"""

import logging
from functools import lru_cache
from importlib import resources
from typing import Any

import yaml

from ..exceptions import DocumentError
from ..models import ChecklistType
from ..models import Mode
from ..models import StandardType

logger = logging.getLogger(__name__)

# Checklists combined (in order) by ChecklistType.FULL
FULL_CHECKLIST_PARTS = [ChecklistType.PRE, ChecklistType.POST, ChecklistType.OWASP, ChecklistType.API]


@lru_cache(maxsize=None)
def load_catalog(name: str) -> dict[str, dict[str, Any]]:
    """Load a prompt catalog by file stem (``base``, ``modes``, ``checklists``, ``standards``).

    Catalogs are read-only package data, so they are loaded once per process.

    Raises:
        DocumentError: If the catalog is missing or malformed
    """
    resource = resources.files(__name__).joinpath(f"{name}.yaml")
    try:
        data = yaml.safe_load(resource.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise DocumentError(f"Failed to load prompt catalog '{name}': {e}") from e

    if not isinstance(data, dict):
        raise DocumentError(f"Prompt catalog '{name}' must be a mapping")
    logger.debug(f"Loaded prompt catalog '{name}' ({len(data)} entries)")
    return data


def get_prompt(catalog: str, prompt_id: str) -> str:
    """Get a prompt body from a catalog.

    Raises:
        DocumentError: If the entry does not exist or has no body
    """
    entry = load_catalog(catalog).get(prompt_id)
    if not isinstance(entry, dict) or not isinstance(entry.get("body"), str):
        raise DocumentError(f"Prompt '{prompt_id}' not found in catalog '{catalog}'")
    return entry["body"].strip()


def get_base_prompt() -> str:
    """Security-first guidelines included in every CLAUDE.md."""
    return get_prompt("base", "base")


def get_mode_prompt(mode: Mode) -> str:
    """Behavioral instructions for a mode."""
    return get_prompt("modes", mode.value)


def get_standards_prompt(standard: StandardType) -> str:
    """Coding standards text for one standard."""
    return get_prompt("standards", standard.value)


def get_security_checklist(checklist: ChecklistType) -> str:
    """Get the checklist text; ``none`` yields an empty string and ``full`` combines all checklists."""
    if checklist is ChecklistType.NONE:
        return ""
    if checklist is ChecklistType.FULL:
        return "\n\n".join(get_prompt("checklists", part.value) for part in FULL_CHECKLIST_PARTS)
    return get_prompt("checklists", checklist.value)
