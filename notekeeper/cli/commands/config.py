"""Persistent CLI settings."""

import typer
from rich.console import Console

from ..utils.settings import config_path, load_config, resolve_config, save_config

app = typer.Typer(help="Show or change CLI settings")
console = Console()


@app.command("show")
def show():
    """Show the effective configuration."""
    cfg = resolve_config()
    console.print(f"Config file: {config_path}")
    console.print(f"Base URL: [bold]{cfg.base_url}[/bold]")
    console.print(f"Timeout: {cfg.timeout:g}s (health check {cfg.health_timeout:g}s)")


@app.command("set-url")
def set_url(base_url: str = typer.Argument(..., help="API base URL, e.g. http://host/api")):
    """Store the API base URL in the config file."""
    config = load_config()
    config["base_url"] = base_url.rstrip("/")
    save_config(config)
    console.print(f"Base URL set to [bold]{config['base_url']}[/bold]")
