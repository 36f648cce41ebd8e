"""Configuration storage and API construction for the notekeeper CLI."""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from rich.console import Console
from rich.logging import RichHandler

from notekeeper import ApiConfig, NotesApi

console = Console()

T = TypeVar("T")

# State storage
config_dir = os.path.expanduser("~/.config/notekeeper")
config_path = os.path.join(config_dir, "config.json")

# Set by the root callback from global options
overrides: Dict[str, Optional[str]] = {"base_url": None}


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def load_config() -> Dict[str, Any]:
    """Load configuration from file."""
    try:
        if os.path.exists(config_path):
            with open(config_path, "r", encoding="utf-8") as f:
                return json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not load config file: {exc}")
    return {}


def save_config(config: Dict[str, Any]) -> None:
    """Save configuration to file."""
    try:
        Path(config_dir).mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
    except OSError as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not save config file: {exc}")


def resolve_config() -> ApiConfig:
    """--base-url beats the config file, which beats the environment."""
    base_url = overrides.get("base_url") or load_config().get("base_url")
    return ApiConfig.from_env(base_url=base_url)


def run_with_api(action: Callable[[NotesApi], Awaitable[T]]) -> T:
    """Open a NotesApi, run ``action`` against it and close it again."""

    async def _runner() -> T:
        async with NotesApi(resolve_config()) as api:
            return await action(api)

    return asyncio.run(_runner())
