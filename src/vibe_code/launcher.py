"""Spawns Claude Code as a child process and forwards signals to it."""

import logging
import os
import shutil
import signal
import subprocess
from collections.abc import Mapping
from collections.abc import Sequence
from pathlib import Path

from .exceptions import LaunchError
from .models import Result

logger = logging.getLogger(__name__)

DEFAULT_CLAUDE_COMMAND = "claude"

FORWARDED_SIGNALS = [sig for sig in ("SIGINT", "SIGTERM", "SIGHUP") if hasattr(signal, sig)]


def find_claude_code(custom_path: str | None = None) -> Result[str]:
    """Locate the Claude Code executable.

    Args:
        custom_path: Explicit executable path; must exist and be executable

    Returns:
        Success with the command to run, or failure with LaunchError
    """
    if custom_path:
        path = Path(custom_path).expanduser().resolve()
        if not (path.is_file() and os.access(path, os.X_OK)):
            return Result.failure(LaunchError(f"Claude Code not found at: {path}"))
        return Result.success(str(path))

    if shutil.which(DEFAULT_CLAUDE_COMMAND) is None:
        return Result.failure(
            LaunchError(
                "Claude Code not found. Install it (npm install -g @anthropic-ai/claude-code) "
                "or set its location with --claude-path."
            )
        )
    return Result.success(DEFAULT_CLAUDE_COMMAND)


def run_claude_code(
    claude_path: str | None = None,
    cwd: Path | str | None = None,
    args: Sequence[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> Result[int]:
    """Run Claude Code attached to the terminal and wait for it to exit.

    No shell is involved. SIGINT, SIGTERM and SIGHUP received while the
    child runs are forwarded to it; previous handlers are restored afterwards.

    Args:
        claude_path: Custom executable path (default: ``claude`` on PATH)
        cwd: Working directory for the child
        args: Extra command-line arguments
        env: Variables merged over the current environment

    Returns:
        Success with the child's exit code (128+N if killed by signal N),
        or failure with LaunchError
    """
    found = find_claude_code(claude_path)
    if not found.ok:
        return Result.failure(found.error)

    command = [found.value, *(args or [])]
    child_env = {**os.environ, **(env or {})}

    logger.debug(f"Launching {command} in {cwd or os.getcwd()}")
    try:
        child = subprocess.Popen(command, cwd=cwd, env=child_env)
    except OSError as e:
        return Result.failure(LaunchError(f"Failed to start Claude Code: {e}"))

    def forward(signum: int, frame: object) -> None:
        child.send_signal(signum)

    previous = {}
    for name in FORWARDED_SIGNALS:
        signum = getattr(signal, name)
        previous[signum] = signal.signal(signum, forward)

    try:
        returncode = child.wait()
    finally:
        for signum, handler in previous.items():
            # None means the handler was not installed from Python
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)

    if returncode < 0:
        returncode = 128 - returncode
    logger.debug(f"Claude Code exited with {returncode}")
    return Result.success(returncode)
