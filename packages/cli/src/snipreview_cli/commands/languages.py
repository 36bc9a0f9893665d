"""languages command — list supported language tags."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from snipreview_core.formatting import default_formatters
from snipreview_core.languages import SUPPORTED_LANGUAGES

console = Console()


@click.command("languages")
def languages_cmd():
    """List the language tags accepted by `review --language`."""
    formatters = default_formatters()

    table = Table(title="Supported languages", show_header=True, header_style="bold cyan")
    table.add_column("Tag", style="bold")
    table.add_column("Name")
    table.add_column("Formatter")

    for tag, name in SUPPORTED_LANGUAGES:
        formatter = formatters.get(tag)
        table.add_row(tag, name, formatter.name if formatter else "[dim]—[/dim]")

    console.print(table)
