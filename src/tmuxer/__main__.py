"""CLI entry point for tmuxer."""

from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from tmuxer import __version__
from tmuxer.attach import attach_first_session
from tmuxer.config import (
    SAMPLE_LAYOUT,
    ConfigError,
    Layout,
    check_layout,
    display_layout_warnings,
    layout_to_yaml,
    load_layout,
    save_layout,
)
from tmuxer.display import display_layout
from tmuxer.layouts import StepResult, apply_layout
from tmuxer.tmux_manager import Tmux
from tmuxer.xdg_paths import CONFIG_FILE_NAMES, find_config_file

app = typer.Typer(
    name="tmuxer",
    help="A CLI tool to manage preconfigurable tmux sessions.",
    no_args_is_help=False,
)

console = Console()
err_console = Console(stderr=True)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-C", help="Layout config file (default: ./config.yaml)."),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"tmuxer {__version__}")
        raise typer.Exit()


def _load_or_exit(config_path: Path | None) -> tuple[Layout, Path]:
    """Load the layout, exiting with status 1 if it cannot be read."""
    path = config_path or find_config_file()
    try:
        return load_layout(path), path
    except ConfigError as e:
        err_console.print(f"[red]Error reading config file,[/] {escape(str(e))}")
        raise typer.Exit(1) from None


def _step_reporter(debug: bool) -> Callable[[StepResult], None]:
    """Print failed steps, and successful ones too when debugging."""

    def report(step: StepResult) -> None:
        if not step.ok:
            err_console.print(
                f"[red]Error executing command:[/] {escape(str(step.operation))}: {escape(step.result.error)}"
            )
        elif debug:
            console.print(f"[dim]{escape(str(step.operation))}[/]")

    return report


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: ConfigOption = None,
    fail_fast: Annotated[
        bool,
        typer.Option("--fail-fast", "-x", help="Stop building the layout at the first failed tmux command."),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with error on config warnings."),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", "-D", help="Print every tmux command as it runs."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version."),
    ] = None,
) -> None:
    """Build every configured tmux session, then attach to the first one."""
    # If a subcommand was invoked, don't run main logic
    if ctx.invoked_subcommand is not None:
        return

    layout, path = _load_or_exit(config_path)
    if debug:
        console.print(f"[dim]Config file: {escape(str(path))}[/]")

    warnings = check_layout(layout)
    if warnings:
        display_layout_warnings(warnings, err_console, str(path))
        if strict:
            raise typer.Exit(1)

    display_layout(layout, console)

    backend = Tmux()
    results = apply_layout(layout, backend, stop_on_failure=fail_fast, on_step=_step_reporter(debug))
    failed = [step for step in results if not step.ok]
    if failed and fail_fast:
        err_console.print("[yellow]Stopped building the layout after the first failure.[/]")
    elif failed and debug:
        console.print(f"[dim]{len(failed)} of {len(results)} tmux commands failed.[/]")

    attach_first_session(layout, backend, console)


@app.command()
def init_config(config_path: ConfigOption = None) -> None:
    """Create a sample layout config file."""
    config_file = config_path or Path.cwd() / CONFIG_FILE_NAMES[0]

    if config_file.exists():
        err_console.print(f"[yellow]Config file already exists:[/] {escape(str(config_file))}")
        raise typer.Exit(1)

    save_layout(SAMPLE_LAYOUT, config_file)
    console.print(f"[green]✓[/] Created config file: {escape(str(config_file))}")


config_app = typer.Typer(
    name="config",
    help="Configuration management commands.",
)
app.add_typer(config_app, name="config")


@config_app.command("validate")
def config_validate(config_path: ConfigOption = None) -> None:
    """Validate the layout config and report warnings."""
    layout, path = _load_or_exit(config_path)
    warnings = check_layout(layout)

    if warnings:
        display_layout_warnings(warnings, err_console, str(path))
        raise typer.Exit(1)

    console.print(f"[green]✓[/] {escape(str(path))} is valid.")


@config_app.command("show")
def config_show(config_path: ConfigOption = None) -> None:
    """Show the parsed layout as YAML."""
    layout, _path = _load_or_exit(config_path)
    console.print(escape(layout_to_yaml(layout)))


def cli() -> None:
    """Console script entry point; every failure exits with status 1."""
    try:
        app()
    except SystemExit as e:
        if e.code not in (0, None):
            raise SystemExit(1) from None
        raise


if __name__ == "__main__":
    cli()
