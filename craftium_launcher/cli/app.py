"""
Defines the command-line interface for the launcher using Typer.
"""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from craftium_launcher import __version__
from craftium_launcher.auth.session import OfflineAuthenticator
from craftium_launcher.core.orchestrator import Orchestrator
from craftium_launcher.core.status import StatusService
from craftium_launcher.exceptions import LauncherError
from craftium_launcher.models.config import get_default_root_dir
from craftium_launcher.net.downloader import Downloader
from craftium_launcher.storage.config_store import ConfigStore
from craftium_launcher.storage.settings_manager import SettingsManager
from craftium_launcher.utils.structured_logger import create_structured_logger

from .formatters import (
    format_error_with_suggestions,
    print_settings,
    print_status,
    print_summary_panel,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("craftium_launcher")

app = typer.Typer(
    name="craftium-launcher",
    help=(
        "Installs the CraftiumClient Fabric setup and launches it. Use"
        " 'craftium-launcher <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def _root_dir(ctx: typer.Context) -> Path:
    return (ctx.obj or {}).get("root_dir") or get_default_root_dir()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="-v: launcher debug logs. -vv: also library (aiohttp, asyncio) logs.",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    root: Path | None = typer.Option(  # noqa: B008
        None,
        "--root",
        help="Launcher directory (default: ~/.craftiumclient or $CRAFTIUM_HOME).",
    ),
):
    """CraftiumClient Launcher"""
    if version:
        console.print(
            f"[bold]craftium-launcher[/bold] version [cyan]{__version__}[/cyan]"
        )
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 1:
        log_level = "DEBUG"
    logging.getLogger("craftium_launcher").setLevel(log_level)
    # Library loggers (aiohttp, asyncio) only at -vv.
    logging.getLogger().setLevel("DEBUG" if verbose >= 2 else "INFO")

    ctx.obj = {"root_dir": root.expanduser() if root else None}

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    ctx: typer.Context,
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing settings file."
    ),
):
    """Write a launcher.ini with the default settings."""
    manager = SettingsManager(_root_dir(ctx))
    if (
        manager.settings_file_path.exists()
        and not force
        and not typer.confirm("Settings file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    try:
        manager.save_settings({})
    except LauncherError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    console.print(
        f"[bold green]✓ Settings saved to '{manager.settings_file_path}'[/bold green]"
    )


@app.command(name="settings")
def settings_command(ctx: typer.Context):
    """Show the effective launcher settings."""
    try:
        settings = SettingsManager(_root_dir(ctx)).load_settings()
    except LauncherError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    print_settings(settings, console)


@app.command()
def status(
    ctx: typer.Context,
    name: str | None = typer.Option(
        None, "--name", "-n", help="Player name to report as signed in."
    ),
):
    """Show sign-in state and installed version."""
    try:
        settings = SettingsManager(_root_dir(ctx)).load_settings()
        identity = OfflineAuthenticator().authenticate(name) if name else None
        saved_config = ConfigStore(settings.config_path).load()
    except LauncherError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    print_status(StatusService(settings, identity).get_status(), saved_config, console)


@app.command()
def launch(
    ctx: typer.Context,
    name: str = typer.Option("Player", "--name", "-n", help="Player name."),
    java: str | None = typer.Option(
        None, "--java", help="Java executable used for the installer and the game."
    ),
    mc_version: str | None = typer.Option(
        None, "--mc-version", help="Minecraft version to install."
    ),
    loader_version: str | None = typer.Option(
        None, "--loader-version", help="Fabric loader version to install."
    ),
    redownload: bool | None = typer.Option(
        None,
        "--redownload/--keep-existing",
        help="Re-download mods that are already present (default: redownload).",
    ),
    log_json: bool = typer.Option(
        False, "--log-json", help="Also write a JSONL event log to <root>/logs."
    ),
):
    """Install Fabric, download mods, and start the game."""
    cli_options = {
        "java_executable": java,
        "runtime_version": mc_version,
        "loader_version": loader_version,
        "redownload_assets": redownload,
    }

    try:
        settings = SettingsManager(_root_dir(ctx)).load_settings(cli_options)
        identity = OfflineAuthenticator().authenticate(name)
    except LauncherError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    console.print(
        f"[bold cyan]=== {settings.launcher_name} Launcher "
        f"v{settings.version} ===[/bold cyan]"
    )

    async def _launch_async():
        base_logger, events = create_structured_logger(
            settings.log_dir, enable_json=log_json
        )
        base_logger.set_session_context(
            runtime_version=settings.runtime_version,
            loader_version=settings.loader_version,
        )
        try:
            async with Downloader() as downloader:
                orchestrator = Orchestrator(settings, downloader, events=events)
                result = await orchestrator.run(identity)

            print_summary_panel(result, console)
            if not result.succeeded:
                console.print(format_error_with_suggestions(result.error))
                raise typer.Exit(code=1)

            await result.launch_handle.wait()
        finally:
            base_logger.close()

    asyncio.run(_launch_async())
