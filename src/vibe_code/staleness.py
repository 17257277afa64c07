"""Decides whether CLAUDE.md must be regenerated."""

import logging
from pathlib import Path

from .builder import get_claude_md_path
from .manager import get_project_config_path

logger = logging.getLogger(__name__)


def needs_regeneration(root: Path | str, config_path: Path | None = None) -> bool:
    """Check whether CLAUDE.md is older than the project config.

    Only modification times are compared, so rewriting identical config
    content still counts as a change. If either file cannot be stat'd the
    answer is True.

    Args:
        root: Project root directory
        config_path: Project config file (default: ``<root>/.vibe/config.json``);
            pass ``manager.paths.project`` when paths are injected

    Returns:
        True if the config is strictly newer than CLAUDE.md or either file
        is unavailable
    """
    config_path = config_path if config_path is not None else get_project_config_path(root)
    document_path = get_claude_md_path(root)

    try:
        config_mtime = config_path.stat().st_mtime_ns
        document_mtime = document_path.stat().st_mtime_ns
    except OSError as e:
        logger.debug(f"Regeneration required, cannot stat: {e}")
        return True

    stale = config_mtime > document_mtime
    logger.debug(f"{document_path} is {'stale' if stale else 'up to date'}")
    return stale
