"""Command-line interface for vibe-code.

Commands:
    vibe init                      Initialize vibe-code in the current project
    vibe mode [NEW_MODE]           View or switch the current mode
    vibe config [--global]         Show configuration
    vibe config get KEY            Get a configuration value
    vibe config set KEY VALUE      Set a configuration value
    vibe start                     Launch Claude Code with the project configuration
"""

import json
import logging
import platform
from pathlib import Path
from typing import Annotated
from typing import Any
from typing import NoReturn

import click
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .builder import build_claude_md
from .builder import get_claude_md_path
from .exceptions import ConfigValidationError
from .exceptions import NotInitializedError
from .launcher import run_claude_code
from .manager import ConfigManager
from .models import ChecklistType
from .models import ExitCode
from .models import Mode
from .models import Scope
from .models import StandardType
from .modes import AVAILABLE_MODES
from .modes import MODE_INFO
from .modes import compare_modes
from .modes import format_all_modes
from .modes import format_mode
from .modes import get_current_mode
from .modes import parse_mode
from .staleness import needs_regeneration
from .switcher import switch_mode

app = typer.Typer(
    name="vibe",
    help="Security-first CLI wrapper for Claude Code with opinionated prompts and guardrails.",
    no_args_is_help=True,
    add_completion=False,
)
config_app = typer.Typer(help="View or modify configuration.")
app.add_typer(config_app, name="config")

console = Console()
err_console = Console(stderr=True)

# Keys accepted by `vibe config set`
GLOBAL_KEYS = ("defaultMode", "editor", "claudeCodePath", "includeSecurityChecklist", "includeStandards")
PROJECT_KEYS = ("mode", "projectName", "includeSecurityChecklist", "includeStandards", "customPrompts")


def _setup_logging(verbose: bool) -> None:
    logger = logging.getLogger("vibe_code")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=err_console, show_path=False, show_time=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _fail(message: str, code: ExitCode) -> NoReturn:
    err_console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(code=int(code))


def _manager() -> ConfigManager:
    return ConfigManager(Path.cwd())


def _require_mode(value: str) -> Mode:
    parsed = parse_mode(value)
    if not parsed.ok:
        _fail(str(parsed.error), ExitCode.INVALID_ARGUMENT)
    return parsed.value


def _require_initialized(manager: ConfigManager) -> None:
    if not manager.is_project_initialized():
        _fail(str(NotInitializedError()), ExitCode.CONFIG_ERROR)


def _format_value(value: Any) -> str:
    if value is None:
        return "(not set)"
    if isinstance(value, str):
        return f'"{value}"'
    return json.dumps(value)


def _display_config(data: dict[str, Any], title: str, source: str) -> None:
    table = Table(title=title, caption=escape(source), show_header=False, box=None, title_justify="left")
    table.add_column("key", style="bold")
    table.add_column("value", style="cyan")
    for key, value in data.items():
        table.add_row(key, escape(_format_value(value)))
    console.print()
    console.print(table)
    console.print()


def _parse_list(value: str) -> list[str]:
    if value.startswith("["):
        try:
            items = json.loads(value)
        except json.JSONDecodeError:
            raise ConfigValidationError(f"Invalid JSON array: {value}") from None
        if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
            raise ConfigValidationError(f"Expected a JSON array of strings: {value}")
        return items
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_config_value(key: str, value: str) -> Any:
    """Parse a `config set` value for the given key into its JSON form.

    Raises:
        ConfigValidationError: If the value is not valid for the key
    """
    if key in ("mode", "defaultMode"):
        return parse_mode(value).unwrap().value

    if key == "includeSecurityChecklist":
        valid = [item.value for item in ChecklistType]
        if value not in valid:
            raise ConfigValidationError(f'Invalid checklist: "{value}". Valid: {", ".join(valid)}')
        return value

    if key == "includeStandards":
        valid = [item.value for item in StandardType]
        standards = _parse_list(value)
        for standard in standards:
            if standard not in valid:
                raise ConfigValidationError(f'Invalid standard: "{standard}". Valid: {", ".join(valid)}')
        return standards

    if key == "customPrompts":
        return _parse_list(value)

    return value


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"vibe-code v{__version__}")
        typer.echo(f"Python {platform.python_version()}")
        typer.echo(f"{platform.system().lower()} {platform.machine()}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging.")] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=_version_callback, is_eager=True, help="Show version information."),
    ] = None,
) -> None:
    """Security-first CLI wrapper for Claude Code with opinionated prompts and guardrails."""
    _setup_logging(verbose)


# ===== init =====


def _prompt_for_mode() -> Mode:
    console.print(format_all_modes())
    choice = typer.prompt(
        "Select your development mode",
        type=click.Choice([mode.value for mode in AVAILABLE_MODES]),
        default=Mode.GUIDED.value,
    )
    return Mode(choice)


@app.command()
def init(
    mode: Annotated[str | None, typer.Option("--mode", "-m", help="Initial mode: learning, guided or expert.")] = None,
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite existing configuration.")] = False,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip prompts and use defaults.")] = False,
    name: Annotated[str | None, typer.Option("--name", help="Project name shown in CLAUDE.md.")] = None,
) -> None:
    """Initialize vibe-code in the current project."""
    selected = _require_mode(mode) if mode is not None else None
    manager = _manager()

    if manager.is_project_initialized() and not force:
        if yes:
            console.print("[yellow]Project already initialized. Use --force to overwrite.[/yellow]")
            raise typer.Exit(code=int(ExitCode.GENERAL_ERROR))
        if not typer.confirm("Project already initialized. Overwrite configuration?", default=False):
            console.print("[dim]Initialization cancelled.[/dim]")
            raise typer.Exit(code=int(ExitCode.SUCCESS))

    if selected is None:
        if yes:
            selected = Mode.GUIDED
        else:
            if not typer.confirm(f"Initialize vibe-code in {manager.project_root}?", default=True):
                console.print("[dim]Initialization cancelled.[/dim]")
                raise typer.Exit(code=int(ExitCode.SUCCESS))
            selected = _prompt_for_mode()

    with console.status("Initializing project..."):
        initialized = manager.init_project(mode=selected, project_name=name)
        if not initialized.ok:
            _fail(f"Failed to create configuration: {initialized.error}", ExitCode.CONFIG_ERROR)

        config = manager.load_config()
        if not config.ok:
            _fail(f"Failed to load configuration: {config.error}", ExitCode.CONFIG_ERROR)

        built = build_claude_md(config.value, manager.project_root)
        if not built.ok:
            _fail(f"Failed to generate CLAUDE.md: {built.error}", ExitCode.GENERAL_ERROR)

    info = MODE_INFO[selected]
    console.print("\n[bold green]✓ vibe-code initialized![/bold green]\n")
    console.print("Created files:")
    console.print(f"[dim]  • {escape(str(manager.paths.project))}[/dim]")
    console.print(f"[dim]  • {escape(str(get_claude_md_path(manager.project_root)))}[/dim]\n")
    console.print(f"Mode: {format_mode(selected)}")
    console.print(f"[dim]  {info.description}[/dim]\n")
    console.print("Next steps:")
    console.print("[cyan]  1.[/cyan] Review CLAUDE.md to see your prompt configuration")
    console.print("[cyan]  2.[/cyan] Run [yellow]vibe start[/yellow] to launch Claude Code")
    console.print("[cyan]  3.[/cyan] Use [yellow]vibe mode <mode>[/yellow] to switch modes\n")


# ===== mode =====


def _show_current_mode(manager: ConfigManager) -> None:
    current = get_current_mode(manager)
    if not current.ok:
        _fail(f"Error: {current.error}", ExitCode.CONFIG_ERROR)

    mode = current.value
    console.print("\n[bold]Current Mode[/bold]")
    console.print(f"{format_mode(mode)}")
    console.print(f"[dim]   {MODE_INFO[mode].description}[/dim]\n")
    console.print("[bold]Available Modes[/bold]")
    console.print(format_all_modes(mode))
    console.print("\n[dim]Switch mode:[/dim] [yellow]vibe mode <learning|guided|expert>[/yellow]\n")


@app.command("mode")
def mode_command(
    new_mode: Annotated[str | None, typer.Argument(help="Mode to switch to: learning, guided or expert.")] = None,
    compare: Annotated[bool, typer.Option("--compare", help="Show a comparison of all modes.")] = False,
) -> None:
    """View or change the current mode."""
    if compare:
        console.print(compare_modes())
        return

    manager = _manager()
    _require_initialized(manager)

    if new_mode is None:
        _show_current_mode(manager)
        return

    selected = _require_mode(new_mode)
    with console.status(f"Switching to {format_mode(selected)} mode..."):
        switched = switch_mode(manager, selected)
    if not switched.ok:
        _fail(f"Failed to switch mode: {switched.error}", ExitCode.CONFIG_ERROR)

    outcome = switched.value
    if outcome.previous_mode == outcome.new_mode:
        console.print(f"[green]✓[/green] Already in {format_mode(selected)} mode")
        console.print("[dim]CLAUDE.md regenerated.[/dim]")
    else:
        console.print(f"[green]✓[/green] Switched from {format_mode(outcome.previous_mode)} to {format_mode(selected)}")
    console.print(f"\n[dim]{MODE_INFO[selected].description}[/dim]\n")


# ===== config =====


def _is_global(ctx: typer.Context, flag: bool) -> bool:
    return flag or bool((ctx.obj or {}).get("global", False))


@config_app.callback(invoke_without_command=True)
def config_show(
    ctx: typer.Context,
    global_: Annotated[bool, typer.Option("--global", "-g", help="Use global configuration (~/.vibe/config.json).")] = False,
) -> None:
    """Show the merged configuration, or the global one with --global."""
    ctx.ensure_object(dict)["global"] = global_
    if ctx.invoked_subcommand is not None:
        return

    manager = _manager()
    if global_ or not manager.is_project_initialized():
        if not global_:
            err_console.print("[yellow]Project not initialized. Showing global config only.[/yellow]")
            err_console.print("[dim]Run 'vibe init' to create project config.[/dim]")
        result = manager.read_global_config()
        if not result.ok:
            _fail(f"Error: {result.error}", ExitCode.CONFIG_ERROR)
        _display_config(
            result.value.model_dump(mode="json", by_alias=True), "Global Configuration", str(manager.paths.user)
        )
        console.print("[dim]Set values with: vibe config set <key> <value> --global[/dim]\n")
        return

    merged = manager.load_config()
    if not merged.ok:
        _fail(f"Error: {merged.error}", ExitCode.CONFIG_ERROR)
    _display_config(
        merged.value.model_dump(mode="json", by_alias=True),
        "Merged Configuration (Global + Project)",
        f"{manager.paths.user} + {manager.paths.project}",
    )
    console.print("[dim]Use --global to view/edit global config only.[/dim]")
    console.print("[dim]Without --global, 'set' modifies project config.[/dim]\n")


@config_app.command("get")
def config_get(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Configuration key, e.g. mode or includeStandards.")],
    global_: Annotated[bool, typer.Option("--global", "-g", help="Get from global configuration.")] = False,
) -> None:
    """Get a specific configuration value."""
    manager = _manager()
    result = manager.read_global_config() if _is_global(ctx, global_) else manager.load_config()
    if not result.ok:
        _fail(f"Error: {result.error}", ExitCode.CONFIG_ERROR)

    data = result.value.model_dump(mode="json", by_alias=True)
    if key not in data:
        _fail(f"Unknown config key: {key}", ExitCode.INVALID_ARGUMENT)

    value = data[key]
    if value is None:
        typer.echo("(not set)")
    elif isinstance(value, (list, dict)):
        typer.echo(json.dumps(value))
    else:
        typer.echo(str(value))


@config_app.command("set")
def config_set(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Configuration key.")],
    value: Annotated[str, typer.Argument(help="New value; lists accept a JSON array or comma-separated values.")],
    global_: Annotated[bool, typer.Option("--global", "-g", help="Set in global configuration.")] = False,
) -> None:
    """Set a configuration value."""
    scope = Scope.GLOBAL if _is_global(ctx, global_) else Scope.PROJECT
    valid_keys = GLOBAL_KEYS if scope is Scope.GLOBAL else PROJECT_KEYS
    if key not in valid_keys:
        _fail(
            f"Invalid key for {scope.value} config: {key}. Valid keys: {', '.join(valid_keys)}",
            ExitCode.INVALID_ARGUMENT,
        )

    try:
        parsed = parse_config_value(key, value)
    except ConfigValidationError as e:
        _fail(str(e), ExitCode.INVALID_ARGUMENT)

    manager = _manager()
    if scope is Scope.PROJECT and not manager.is_project_initialized():
        _fail("Project not initialized. Run 'vibe init' first, or use --global.", ExitCode.CONFIG_ERROR)

    result = manager.update_settings({key: parsed}, scope=scope)
    if not result.ok:
        _fail(f"Error: {result.error}", ExitCode.CONFIG_ERROR)

    console.print(f"[green]✓[/green] Set {scope.value} {key} = [cyan]{escape(_format_value(parsed))}[/cyan]")
    if scope is Scope.PROJECT:
        console.print("[dim]Run 'vibe start' to regenerate CLAUDE.md with the new config.[/dim]")


# ===== start =====


@app.command()
def start(
    mode: Annotated[str | None, typer.Option("--mode", "-m", help="Switch to this mode before starting.")] = None,
    regenerate: Annotated[bool, typer.Option("--regenerate", "-r", help="Force regenerate CLAUDE.md.")] = False,
    claude_path: Annotated[str | None, typer.Option("--claude-path", help="Path to the Claude Code executable.")] = None,
) -> None:
    """Launch Claude Code with the project configuration."""
    selected = _require_mode(mode) if mode is not None else None
    manager = _manager()
    _require_initialized(manager)

    if selected is not None:
        with console.status(f"Switching to {format_mode(selected)} mode..."):
            switched = switch_mode(manager, selected)
        if not switched.ok:
            _fail(f"Failed to switch mode: {switched.error}", ExitCode.CONFIG_ERROR)
        console.print(f"[green]✓[/green] Switched to {format_mode(selected)} mode")

    loaded = manager.load_config()
    if not loaded.ok:
        _fail(f"Failed to load configuration: {loaded.error}", ExitCode.CONFIG_ERROR)
    config = loaded.value

    if regenerate or needs_regeneration(manager.project_root, manager.paths.project):
        with console.status("Updating CLAUDE.md..."):
            built = build_claude_md(config, manager.project_root)
        if not built.ok:
            _fail(f"Failed to update CLAUDE.md: {built.error}", ExitCode.GENERAL_ERROR)
        console.print("[green]✓[/green] CLAUDE.md updated")

    console.print(f"[dim]Mode: {format_mode(config.mode)}[/dim]")
    console.print("[dim]Starting Claude Code...[/dim]\n")

    launched = run_claude_code(claude_path=claude_path or config.claude_code_path, cwd=manager.project_root)
    if not launched.ok:
        _fail(f"Error: {launched.error}", ExitCode.GENERAL_ERROR)

    raise typer.Exit(code=launched.value)
