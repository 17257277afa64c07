"""Mode switching: persist a new mode and regenerate CLAUDE.md."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .builder import build_claude_md
from .exceptions import NotInitializedError
from .exceptions import VibeError
from .manager import ConfigManager
from .models import MergedConfig
from .models import Mode
from .models import Result

logger = logging.getLogger(__name__)

DocumentBuilder = Callable[[MergedConfig, Path], Result[Path]]


class SwitchState(Enum):
    """Lifecycle of a mode switch."""

    IDLE = "idle"
    SWITCHING = "switching"
    COMMITTED = "committed"
    FAILED = "failed"


@dataclass(frozen=True)
class SwitchOutcome:
    """Result payload of a successful mode switch."""

    previous_mode: Mode
    new_mode: Mode
    claude_md_path: Path


class ModeSwitch:
    """One mode switch for one project.

    Steps run in order and the first failure stops the switch. There is no
    rollback: if regeneration fails after the config was written, the new
    mode stays persisted and the switch still reports failure.

    Args:
        manager: Config manager for the project
        builder: Collaborator that writes CLAUDE.md (default: build_claude_md)
    """

    def __init__(self, manager: ConfigManager, builder: DocumentBuilder = build_claude_md):
        self.manager = manager
        self.builder = builder
        self.state = SwitchState.IDLE
        self.error: VibeError | None = None

    def run(self, new_mode: Mode) -> Result[SwitchOutcome]:
        """Switch the project to ``new_mode``.

        CLAUDE.md is regenerated even if the mode is unchanged, since prompt
        content can change independently of the mode.
        """
        if self.state is not SwitchState.IDLE:
            raise RuntimeError(f"Mode switch already {self.state.value}")

        if not self.manager.is_project_initialized():
            return self._fail(NotInitializedError())

        self.state = SwitchState.SWITCHING

        current = self.manager.load_config()
        if not current.ok:
            return self._fail(current.error)
        previous_mode = current.value.mode

        # update_mode reads the raw project config and rewrites it with only
        # the mode changed
        written = self.manager.update_mode(new_mode)
        if not written.ok:
            return self._fail(written.error)

        reloaded = self.manager.load_config()
        if not reloaded.ok:
            return self._fail(reloaded.error)

        built = self.builder(reloaded.value, self.manager.project_root)
        if not built.ok:
            logger.warning(f"Mode set to {new_mode.value} but CLAUDE.md was not regenerated")
            return self._fail(built.error)

        self.state = SwitchState.COMMITTED
        logger.info(f"Switched mode from {previous_mode.value} to {new_mode.value}")
        return Result.success(SwitchOutcome(previous_mode, new_mode, built.value))

    def _fail(self, error: VibeError) -> Result[SwitchOutcome]:
        self.state = SwitchState.FAILED
        self.error = error
        return Result.failure(error)


def switch_mode(
    manager: ConfigManager, new_mode: Mode, builder: DocumentBuilder = build_claude_md
) -> Result[SwitchOutcome]:
    """Switch a project's mode and regenerate CLAUDE.md.

    Args:
        manager: Config manager for the project
        new_mode: Mode to switch to
        builder: Collaborator that writes CLAUDE.md

    Returns:
        Success with previous/new mode and the CLAUDE.md path, or the first failure
    """
    return ModeSwitch(manager, builder).run(new_mode)
