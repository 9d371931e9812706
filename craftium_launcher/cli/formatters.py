"""
Functions for formatting and displaying launcher data in the console using Rich.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from craftium_launcher.core.orchestrator import PipelineResult
from craftium_launcher.models.config import LauncherConfig, LauncherSettings
from craftium_launcher.models.session import StatusSnapshot


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "FetchError": [
            "• Check your internet connection.",
            "• The download server might be temporarily unavailable.",
            "• Re-run the launcher; partially downloaded files are overwritten.",
        ],
        "SpawnError": [
            "• Make sure Java is installed and on your PATH.",
            "• Point the launcher at a Java binary with `--java`.",
            "• Installer output above usually explains a non-zero exit.",
        ],
        "LauncherIOError": [
            "• Check that the launcher directory is writable.",
            "• Use `--root` to install somewhere else.",
        ],
        "ConfigurationError": [
            "• Review launcher.ini in the launcher directory.",
            "• Run `craftium-launcher init --force` to regenerate it.",
        ],
        "AuthenticationError": [
            "• Player names are 3-16 letters, digits or underscores.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_settings(settings: LauncherSettings, console: Console | None = None):
    """Displays the effective launcher settings and derived paths."""
    console = console or Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    for key, value in settings.model_dump().items():
        table.add_row(f"{key}:", str(value))
    table.add_row("game_dir:", f"[dim]{settings.game_dir}[/dim]")
    table.add_row("installer_url:", f"[dim]{settings.installer_url}[/dim]")

    console.print(
        Panel(
            table,
            title=f"Settings ([dim]{settings.settings_path}[/dim])",
            border_style="cyan",
        )
    )


def print_status(
    snapshot: StatusSnapshot,
    saved_config: LauncherConfig | None,
    console: Console | None = None,
):
    """Displays the status snapshot that presentation layers consume."""
    console = console or Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    if snapshot.authenticated and snapshot.user:
        table.add_row("Signed in:", f"[green]{snapshot.user.name}[/green]")
        table.add_row("UUID:", f"[dim]{snapshot.user.uuid}[/dim]")
    else:
        table.add_row("Signed in:", "[yellow]no[/yellow]")
    table.add_row("Launcher version:", snapshot.version)
    installed = saved_config.version if saved_config else "[dim]not installed[/dim]"
    table.add_row("Installed version:", installed)

    console.print(Panel(table, title="Launcher Status", border_style="cyan"))


def print_summary_panel(result: PipelineResult, console: Console | None = None):
    """Displays the outcome of a pipeline run."""
    console = console or Console()
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column(style="bold")
    table.add_column(justify="right")

    flow = " → ".join(state.value for state in result.history)
    table.add_row("Stages", flow)
    table.add_row("Mods downloaded", str(len(result.fetched_assets)))
    table.add_row("Duration", f"{result.duration_s:.1f}s")
    if result.launch_handle:
        table.add_row("Game PID", str(result.launch_handle.pid))

    if result.succeeded:
        title, style = "[bold green]Launch Complete[/bold green]", "green"
    else:
        title, style = "[bold red]Launch Failed[/bold red]", "red"
    console.print(Panel(table, title=title, border_style=style, expand=False))
