"""Command modules for the notekeeper CLI."""

from notekeeper.cli.commands import categories, config, notes, status, tags

__all__ = ["categories", "config", "notes", "status", "tags"]
