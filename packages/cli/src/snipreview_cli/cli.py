"""CLI entry point for snipreview.

Commands:
  review     — review a code snippet from a file or stdin
  session    — show, restore, clear or check the saved session
  key        — store, clear or inspect the API key
  languages  — list the supported language tags
  init       — interactive setup wizard
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console

from snipreview_cli.commands.init import init_cmd
from snipreview_cli.commands.key import key_cmd
from snipreview_cli.commands.languages import languages_cmd
from snipreview_cli.commands.review import review_cmd
from snipreview_cli.commands.session import session_cmd

console = Console()


def _build_store(config: dict):
    """Instantiate the configured key/value store from .snipreview.yml settings.

    Store selection:
      store: file   → JsonFileStore (store_path, default .snipreview.json)
      store: sqlite → SQLiteStore   (store_path, default .snipreview.db)
      store: memory → MemoryStore   (nothing persists past this command)

    This factory lives in cli.py so neither snipreview_core nor
    snipreview_store know about the CLI config format.
    """
    store_type = config.get("store", "file")

    if store_type == "memory":
        from snipreview_store.memory import MemoryStore

        return MemoryStore()

    if store_type == "sqlite":
        from snipreview_store.sqlite import SQLiteStore

        return SQLiteStore(db_path=config.get("store_path") or ".snipreview.db")

    from snipreview_store.file import JsonFileStore

    return JsonFileStore(path=config.get("store_path") or ".snipreview.json")


@click.group()
@click.version_option(
    version=importlib.metadata.version("snipreview"),
    prog_name="snipreview",
)
@click.option(
    "--config",
    "config_path",
    default=".snipreview.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="SNIPREVIEW_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """AI code review for snippets, with saved sessions."""
    from snipreview_core.config import load_config

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    ctx.ensure_object(dict)

    try:
        config = load_config(config_path)
    except ValueError as e:
        raise click.UsageError(str(e))

    store = _build_store(config)
    ctx.obj["config"] = config
    ctx.obj["config_path"] = config_path
    ctx.obj["store"] = store
    ctx.call_on_close(store.close)


main.add_command(review_cmd)
main.add_command(session_cmd)
main.add_command(key_cmd)
main.add_command(languages_cmd)
main.add_command(init_cmd)
