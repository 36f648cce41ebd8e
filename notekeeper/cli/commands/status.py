"""Top-level commands: backend reachability and dashboard statistics."""

import typer
from rich.console import Console
from rich.panel import Panel

from notekeeper.exceptions import NotekeeperError

from ..utils.settings import resolve_config, run_with_api

console = Console()


def health():
    """Check whether the backend answers."""
    base_url = resolve_config().base_url
    online = run_with_api(lambda api: api.check_health())
    if online:
        console.print(f"[bold green]Backend online[/bold green] ({base_url})")
        return
    console.print(f"[bold red]Backend offline[/bold red] ({base_url})")
    raise typer.Exit(1)


def stats():
    """Show note statistics."""
    try:
        state = run_with_api(lambda api: api.load_dashboard())
    except NotekeeperError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    summary = state.stats
    console.print(
        Panel(
            f"Total notes: [bold]{summary.total}[/bold]\n"
            f"Recent: [bold]{summary.recent}[/bold]\n"
            f"Categories in use: [bold]{summary.categories}[/bold]\n"
            f"Tags available: [bold]{len(state.tags)}[/bold]",
            title="Dashboard",
        )
    )
