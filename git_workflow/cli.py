"""
CLI interface using Typer with Rich integration.
"""

import sys
from pathlib import Path
from typing import List, Optional
import typer
from rich.console import Console
from loguru import logger

from .config.settings import Settings
from .core import StatusSession
from .git_ops.actions import ActionReport
from .git_ops.errors import GitRepositoryError, NotARepositoryError
from .git_ops.repository import is_git_repo
from .ui.console import GitWorkflowConsole
from .ui.picker import StatusPicker


app = typer.Typer(
    name="git-workflow",
    help="Interactive git status picker with stage/unstage actions",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=False
)

# Global console for error handling
console = Console()


def setup_logging(log_level: str = "WARNING", log_file: Optional[Path] = None):
    """Setup logging configuration."""
    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        colorize=True
    )

    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Cannot create log directory {log_file.parent}: {e}")
            return
        logger.add(
            log_file,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="1 MB",
            retention="7 days"
        )


def _load_settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


def _session(ctx: typer.Context) -> StatusSession:
    settings = _load_settings(ctx)
    repo_path = ctx.obj["repo_path"] or settings.git.repo_path
    if not is_git_repo(repo_path):
        raise NotARepositoryError(f"Not a Git repository: {repo_path or Path.cwd()}")
    return StatusSession(settings, repo_path=repo_path)


def _handle_errors(func):
    """Map exceptions from a command body onto exit codes."""
    try:
        return func()
    except typer.Exit:
        raise
    except GitRepositoryError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        logger.exception("Unexpected error occurred")
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    repo_path: Optional[Path] = typer.Option(
        None, "--repo", "-r",
        help="Git repository path (default: current directory)"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Path to configuration file"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Enable verbose logging"
    ),
    debug: bool = typer.Option(
        False, "--debug", "-d",
        help="Enable debug logging (includes verbose)"
    ),
    version: bool = typer.Option(
        False, "--version",
        help="Show version information"
    )
):
    """
    Interactive git status picker.

    [bold blue]Examples:[/bold blue]

    [green]git-workflow[/green]                       # Open the status picker
    [green]git-workflow list[/green]                  # Print classified status rows
    [green]git-workflow stage a.py b.py[/green]       # Stage two files
    [green]git-workflow unstage-all[/green]           # Reset the index to HEAD
    [green]git-workflow config --show[/green]         # Show configuration
    """
    if version:
        from . import __version__
        console.print(f"[bold blue]Git Workflow[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()

    settings = Settings.from_file(config_file) if config_file else Settings()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = settings.ui.log_level
    setup_logging(log_level, settings.log_file)

    ctx.obj = {"settings": settings, "repo_path": repo_path}

    if ctx.invoked_subcommand is None:
        _run_status(ctx, interactive=settings.ui.interactive)


def _run_status(ctx: typer.Context, interactive: bool) -> None:
    def body():
        session = _session(ctx)
        ui = GitWorkflowConsole(_load_settings(ctx))
        picker = StatusPicker(session, ui)
        if interactive:
            picker.run()
        elif picker.open():
            picker.render()

    _handle_errors(body)


@app.command()
def status(
    ctx: typer.Context,
    interactive: bool = typer.Option(
        True, "--interactive/--no-interactive",
        help="Open the interactive picker or just print the table"
    )
):
    """Show the status picker."""
    _run_status(ctx, interactive and _load_settings(ctx).ui.interactive)


@app.command("list")
def list_status(ctx: typer.Context):
    """Print one classified row per changed file."""
    def body():
        session = _session(ctx)
        ui = GitWorkflowConsole(_load_settings(ctx))
        collection = session.open()
        if collection.is_clean:
            ui.print_info("Working tree is clean.")
        elif collection.all_skipped:
            ui.print_warning("No valid changes found.")
        else:
            ui.print_status_lines(collection)

    _handle_errors(body)


def _finish(ui: GitWorkflowConsole, report: ActionReport) -> None:
    ui.show_action_report(report)
    if report.failed:
        raise typer.Exit(1)


@app.command()
def stage(
    ctx: typer.Context,
    paths: List[str] = typer.Argument(..., help="Repository-relative paths to stage")
):
    """Stage one or more files."""
    def body():
        ui = GitWorkflowConsole(_load_settings(ctx))
        _finish(ui, _session(ctx).executor.stage(paths))

    _handle_errors(body)


@app.command()
def unstage(
    ctx: typer.Context,
    paths: List[str] = typer.Argument(..., help="Repository-relative paths to unstage")
):
    """Unstage one or more files."""
    def body():
        ui = GitWorkflowConsole(_load_settings(ctx))
        _finish(ui, _session(ctx).executor.unstage(paths))

    _handle_errors(body)


@app.command("stage-all")
def stage_all(ctx: typer.Context):
    """Stage every change (git add -A)."""
    def body():
        ui = GitWorkflowConsole(_load_settings(ctx))
        _finish(ui, _session(ctx).executor.stage_all())

    _handle_errors(body)


@app.command("unstage-all")
def unstage_all(ctx: typer.Context):
    """Unstage every change (git reset HEAD --)."""
    def body():
        ui = GitWorkflowConsole(_load_settings(ctx))
        _finish(ui, _session(ctx).executor.unstage_all())

    _handle_errors(body)


@app.command()
def config(
    ctx: typer.Context,
    show: bool = typer.Option(
        False, "--show", "-s",
        help="Show current configuration"
    ),
    save: bool = typer.Option(
        False, "--save",
        help="Write the current configuration to the default config file"
    )
):
    """Show or save configuration."""
    settings = _load_settings(ctx)

    if show:
        typer.echo(settings.model_dump_json(indent=2))

    if save:
        config_path = settings.config_dir / "config.json"
        settings.save_to_file(config_path)
        console.print(f"[green]Configuration saved to:[/green] {config_path}")

    if not show and not save:
        console.print("Use [green]--show[/green] to see current configuration")


def main():
    """Main entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
