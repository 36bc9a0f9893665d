"""session commands — inspect, restore and clear the saved session."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.syntax import Syntax

from snipreview_cli.commands.review import _build_orchestrator
from snipreview_core.orchestrator import ReviewStatus
from snipreview_store.session import SessionStore

console = Console()


def _session_store(ctx) -> SessionStore:
    return SessionStore(ctx.obj["store"])


@click.group("session")
def session_cmd():
    """Manage the saved review session."""


@session_cmd.command("show")
@click.pass_context
def show_cmd(ctx):
    """Print the saved code and its review."""
    record = _session_store(ctx).load()
    if record is None:
        console.print("[yellow]No saved session.[/yellow]")
        return

    console.print(Panel(Syntax(record.code, record.language, line_numbers=True), title=f"Code ({record.language})"))
    if record.review_result:
        console.print(Markdown(record.review_result))
    else:
        console.print("[dim]No review saved with this session.[/dim]")


@session_cmd.command("restore")
@click.option("--output", "-o", type=click.Path(dir_okay=False), required=True, help="File to write the code to.")
@click.option("--force", is_flag=True, help="Overwrite OUTPUT if it already exists.")
@click.pass_context
def restore_cmd(ctx, output: str, force: bool):
    """Write the saved code back to a file."""
    record = _session_store(ctx).load()
    if record is None:
        raise click.ClickException("No saved session to restore.")

    path = Path(output)
    if path.exists() and not force:
        raise click.ClickException(f"{output} already exists. Use --force to overwrite it.")

    orchestrator = _build_orchestrator(ctx.obj["config"], ctx.obj["store"])
    orchestrator.restore(record)
    path.write_text(orchestrator.code, encoding="utf-8")
    console.print(f"[green]Restored {orchestrator.language} code to {output}.[/green]")
    if orchestrator.state.status is ReviewStatus.SUCCESS:
        console.print("[dim]A saved review is available with `snipreview session show`.[/dim]")


@session_cmd.command("clear")
@click.pass_context
def clear_cmd(ctx):
    """Delete the saved session."""
    _session_store(ctx).clear()
    console.print("Session cleared.")


@session_cmd.command("status")
@click.pass_context
def status_cmd(ctx):
    """Report whether a session is saved."""
    if _session_store(ctx).is_session_saved:
        console.print("[green]A session is saved.[/green]")
    else:
        console.print("No saved session.")
