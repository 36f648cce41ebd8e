#!/usr/bin/env python
"""Command line interface for notekeeper."""

from typing import Optional

import typer

from notekeeper.cli.commands import categories, config, notes, status, tags
from notekeeper.cli.utils import settings

app = typer.Typer(help="Command Line Interface for a notes API")

# Add command groups
app.add_typer(notes.app, name="notes")
app.add_typer(tags.app, name="tags")
app.add_typer(categories.app, name="categories")
app.add_typer(config.app, name="config")
app.command("health")(status.health)
app.command("stats")(status.stats)


@app.callback()
def callback(
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="API base URL (overrides config and environment)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable info logs"),
):
    """Manage notes, tags and categories on a remote notes API."""
    settings.overrides["base_url"] = base_url
    settings.setup_logging(verbose)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
