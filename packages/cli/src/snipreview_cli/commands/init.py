"""init command — interactive setup wizard.

Writes .snipreview.yml with the provider, default language and store, and
optionally saves an API key into that store so the first `snipreview review`
works without exporting anything.
"""

from __future__ import annotations

from pathlib import Path

import click
import yaml
from rich.console import Console

from snipreview_core.config import ENV_CREDENTIALS, PROVIDERS, STORES
from snipreview_core.languages import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES

console = Console()


@click.command("init")
@click.pass_context
def init_cmd(ctx):
    """Set up snipreview in the current directory."""
    console.print("\n[bold cyan]snipreview init[/bold cyan] — setup wizard\n")

    provider = click.prompt("AI provider", type=click.Choice(list(PROVIDERS)), default="gemini")
    language = click.prompt(
        "Default language",
        type=click.Choice([tag for tag, _ in SUPPORTED_LANGUAGES]),
        default=DEFAULT_LANGUAGE,
    )

    console.print("\nWhere to keep sessions and saved keys:")
    console.print("  [bold]file[/bold]    — a JSON file next to your config (default)")
    console.print("  [bold]sqlite[/bold]  — a local SQLite database")
    console.print("  [bold]memory[/bold]  — nothing is kept between runs")
    store_type = click.prompt("Store backend", type=click.Choice(list(STORES)), default="file")

    config: dict = {"model": provider, "language": language, "store": store_type}
    if store_type in ("file", "sqlite"):
        default_path = ".snipreview.json" if store_type == "file" else ".snipreview.db"
        store_path = click.prompt("Store path", default=default_path)
        if store_path != default_path:
            config["store_path"] = store_path

    config_path = ctx.obj.get("config_path", ".snipreview.yml") if ctx.obj else ".snipreview.yml"
    _write_config(config, config_path)
    console.print(f"[green]Created {config_path}[/green]")

    env_names = " or ".join(ENV_CREDENTIALS[provider])
    if store_type != "memory" and click.confirm("\nSave an API key now?", default=False):
        from snipreview_cli.auth import build_resolver
        from snipreview_cli.cli import _build_store
        from snipreview_core.config import load_config

        new_config = load_config(config_path)
        store = _build_store(new_config)
        try:
            value = click.prompt("API key", hide_input=True)
            if build_resolver(new_config, store).set_credential(value):
                console.print("[green]API key saved.[/green]")
            else:
                console.print(f"[yellow]Blank key ignored. Set {env_names} or run `snipreview key set`.[/yellow]")
        finally:
            store.close()
    else:
        console.print(f"\n[yellow]Set {env_names} or run `snipreview key set` before reviewing.[/yellow]")

    console.print("\n[bold green]Setup complete![/bold green]")
    console.print("Run a review with: [bold]snipreview review path/to/file[/bold]")


def _write_config(config: dict, config_path: str) -> None:
    """Write or update the config file, preserving any existing keys."""
    path = Path(config_path)
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))
