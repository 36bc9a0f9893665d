"""key commands — manage the persisted API key."""

from __future__ import annotations

import click
from rich.console import Console

from snipreview_cli.auth import build_resolver, mask
from snipreview_core.credentials import CredentialSource

console = Console()


@click.group("key")
def key_cmd():
    """Store or clear the API key used for reviews."""


@key_cmd.command("set")
@click.argument("value", required=False)
@click.pass_context
def set_cmd(ctx, value: str | None):
    """Save VALUE as the API key (prompted for when omitted)."""
    if value is None:
        value = click.prompt("API key", hide_input=True)

    resolver = build_resolver(ctx.obj["config"], ctx.obj["store"])
    if not resolver.set_credential(value):
        raise click.UsageError("The API key must not be blank.")
    console.print(f"[green]API key saved for {ctx.obj['config']['model']}.[/green]")


@key_cmd.command("clear")
@click.pass_context
def clear_cmd(ctx):
    """Remove the saved API key."""
    resolver = build_resolver(ctx.obj["config"], ctx.obj["store"])
    resolver.clear_credential()
    console.print("Saved API key removed.")
    if resolver.credential.source is CredentialSource.ENVIRONMENT:
        console.print("[dim]An API key is still available from the environment.[/dim]")


@key_cmd.command("status")
@click.pass_context
def status_cmd(ctx):
    """Show where the API key comes from."""
    resolver = build_resolver(ctx.obj["config"], ctx.obj["store"])
    credential = resolver.credential
    if credential.source is CredentialSource.NONE:
        console.print("[yellow]No API key configured.[/yellow]")
        return
    console.print(f"API key from {credential.source.value} source: {mask(credential.value)}")
