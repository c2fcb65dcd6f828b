# src/qst/cli.py: Command-Line Interface (CLI) entry point.
# Implemented using Typer. Resolves the command for the given path once, then
# runs it under the supervisor while a background thread watches the path for
# changes and the main thread waits for a termination signal.

import os
import threading
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import SupervisorConfig, load_settings
from .detect import PROJECT_TYPES, detect_all
from .remote import fetch_from_git
from .resolve import resolve_command
from .signals import SignalGateway
from .supervisor import Supervisor
from .util.errors import ConfigError, QstError
from .util.log import get_logger, setup_logging
from .util.paths import working_dir
from .watcher import ChangeWatcher

app = typer.Typer(
    help="Run things quickly: guess the project type, run it, restart on changes.",
    add_completion=False,
)
console = Console(stderr=True)
logger = get_logger(__name__)

# How long to wait for the supervisor loop to wind down after stop().
STOP_TIMEOUT = 5.0

def version_callback(value: bool):
    """Print the version and exit."""
    if value:
        print(f"qst {__version__}")
        raise typer.Exit()

def fail(error: QstError):
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(error.exit_code)

def project_types_table(step: str) -> Table:
    table = Table("Type", f"{step} command", title="Supported project types")
    for project in PROJECT_TYPES:
        table.add_row(project.id, project.commands.get(step, "-"))
    return table

def _watch(watcher: ChangeWatcher, gateway: SignalGateway) -> None:
    try:
        watcher.run()
    except QstError as e:
        gateway.report_fatal(e)
    except OSError as e:
        gateway.report_fatal(QstError(f"Cannot watch '{watcher.target}': {e}"))

@app.command()
def main(
    ctx: typer.Context,
    path: Optional[str] = typer.Argument(None, help="The file or directory to run."),
    delay: Optional[float] = typer.Option(None, "--delay", min=0, help="Seconds to wait before restarting."),
    autorestart: Optional[bool] = typer.Option(
        None, "--autorestart/--no-autorestart", help="Automatically restart after the command exits."
    ),
    command: Optional[str] = typer.Option(None, "--command", help="Command to run ({file} will be substituted)."),
    project_type: Optional[str] = typer.Option(None, "--type", help="Project type to use (autodetected if not present)."),
    step: Optional[str] = typer.Option(None, "--step", help="Which step to run (build, run or test)."),
    just_detect: bool = typer.Option(False, "--detect", help="Detect the project type and exit."),
    remote: bool = typer.Option(False, "--remote", help="Fetch and run a remote project (github.com/owner/repo)."),
    list_types: bool = typer.Option(False, "--list-types", help="List supported project types and exit."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)."),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to a settings file."),
    version: Optional[bool] = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True, help="Display version and exit."
    ),
):
    """Run PATH, restarting it when it changes."""
    try:
        settings = load_settings(config_path)
    except QstError as e:
        fail(e)
    setup_logging(log_level or settings.logging.level)
    step = step or settings.step

    if list_types:
        console.print(project_types_table(step))
        return

    if path is None:
        typer.echo(ctx.get_help(), err=True)
        console.print(project_types_table(step))
        raise typer.Exit(1)

    try:
        target = fetch_from_git(path) if remote else Path(path)

        if just_detect:
            projects = detect_all(target)
            if not projects:
                console.print("[bold red]Error:[/bold red] unknown project type")
                raise typer.Exit(1)
            for project in projects:
                typer.echo(project.id)
            return

        cmd = resolve_command(target, command=command, project_type=project_type, step=step)
    except QstError as e:
        fail(e)

    target = target.absolute()
    try:
        os.chdir(working_dir(target))
    except OSError as e:
        fail(ConfigError(f"Cannot change into the directory of '{target}': {e}"))
    logger.info(f"Command to run: '{cmd}'")

    supervisor = Supervisor(SupervisorConfig(
        command=cmd,
        delay=settings.delay if delay is None else delay,
        auto_restart=settings.autorestart if autorestart is None else autorestart,
    ))
    watcher = ChangeWatcher(target, supervisor, interval=settings.poll_interval)

    gateway = SignalGateway()
    gateway.install()
    try:
        threading.Thread(target=_watch, args=(watcher, gateway), name="qst-watcher", daemon=True).start()
        shutdown = gateway.wait()
        supervisor.stop()
        if not supervisor.join(STOP_TIMEOUT):
            logger.warning("Command did not exit after SIGTERM, leaving it behind")
    finally:
        gateway.restore()

    if shutdown.exit_code:
        raise typer.Exit(shutdown.exit_code)


if __name__ == "__main__":
    app()
