"""Builds the CLAUDE.md instructions document from the merged config."""

import logging
import re
from pathlib import Path

from .exceptions import DocumentError
from .models import VIBE_DIR
from .models import MergedConfig
from .models import Result
from .prompts import get_base_prompt
from .prompts import get_mode_prompt
from .prompts import get_security_checklist
from .prompts import get_standards_prompt

logger = logging.getLogger(__name__)

CLAUDE_MD = "CLAUDE.md"
CUSTOM_PROMPTS_DIR = "prompts"
GENERATED_NOTICE = "<!-- Generated by vibe-code. Manual edits are overwritten on regeneration. -->"

_PROMPT_ID = re.compile(r"^[A-Za-z0-9_-]+$")


def get_claude_md_path(root: Path | str) -> Path:
    """Get the CLAUDE.md path (``<root>/CLAUDE.md``)."""
    return Path(root).resolve() / CLAUDE_MD


def get_custom_prompt_path(root: Path | str, prompt_id: str) -> Path:
    """Resolve a custom prompt identifier to ``<root>/.vibe/prompts/<id>.md``.

    Raises:
        DocumentError: If the identifier contains anything but letters,
            digits, ``-`` and ``_``
    """
    if not _PROMPT_ID.match(prompt_id):
        raise DocumentError(f"Invalid custom prompt id: {prompt_id!r}")
    return Path(root).resolve() / VIBE_DIR / CUSTOM_PROMPTS_DIR / f"{prompt_id}.md"


def _render_sections(config: MergedConfig, root: Path | str) -> list[str]:
    sections = [GENERATED_NOTICE]
    if config.project_name:
        sections.append(f"# Project: {config.project_name}")

    sections.append(get_base_prompt())
    sections.append(get_mode_prompt(config.mode))
    sections.extend(get_standards_prompt(standard) for standard in config.include_standards)

    checklist = get_security_checklist(config.include_security_checklist)
    if checklist:
        sections.append(checklist)

    for prompt_id in config.custom_prompts:
        path = get_custom_prompt_path(root, prompt_id)
        try:
            sections.append(path.read_text(encoding="utf-8").strip())
        except FileNotFoundError:
            logger.warning(f"Custom prompt '{prompt_id}' not found at {path}, skipping")
        except OSError as e:
            raise DocumentError(f"Failed to read custom prompt '{prompt_id}' from {path}: {e}") from e

    return sections


def render_claude_md(config: MergedConfig, root: Path | str) -> Result[str]:
    """Render CLAUDE.md content.

    Order: generated notice, project heading, base prompt, mode prompt,
    standards, security checklist, custom prompts. Output depends only on
    the config and the custom prompt files. Custom prompts without a file
    are skipped with a warning.
    """
    try:
        sections = _render_sections(config, root)
    except DocumentError as e:
        return Result.failure(e)
    return Result.success("\n\n---\n\n".join(sections) + "\n")


def build_claude_md(config: MergedConfig, root: Path | str) -> Result[Path]:
    """Render and write CLAUDE.md, fully replacing any previous document.

    Returns:
        Success with the document path, or failure with DocumentError
    """
    rendered = render_claude_md(config, root)
    if not rendered.ok:
        return Result.failure(rendered.error)

    path = get_claude_md_path(root)
    try:
        path.write_text(rendered.value, encoding="utf-8")
    except OSError as e:
        return Result.failure(DocumentError(f"Failed to write {path}: {e}"))

    logger.info(f"Generated {path} for {config.mode.value} mode")
    return Result.success(path)
