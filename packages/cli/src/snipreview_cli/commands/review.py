"""review command — run an AI review on a code snippet."""

from __future__ import annotations

import asyncio
import logging

import click
from rich.console import Console
from rich.markdown import Markdown

from snipreview_cli.auth import build_resolver
from snipreview_core.client import ProviderReviewClient
from snipreview_core.config import PROVIDERS
from snipreview_core.formatting import FormattingPipeline, default_formatters
from snipreview_core.languages import SUPPORTED_LANGUAGES
from snipreview_core.orchestrator import ReviewOrchestrator, ReviewState, ReviewStatus
from snipreview_store.models import SessionRecord
from snipreview_store.session import SessionStore

console = Console()
logger = logging.getLogger(__name__)


def _build_orchestrator(config: dict, store) -> ReviewOrchestrator:
    return ReviewOrchestrator(
        client=ProviderReviewClient(config["model"]),
        credentials=build_resolver(config, store),
        formatting=FormattingPipeline(default_formatters(config.get("formatter_timeout", 20))),
        format_reviews=config.get("format_reviews", True),
        language=config.get("language", "javascript"),
    )


def _log_transition(state: ReviewState) -> None:
    logger.debug("Review state: %s (loading=%s)", state.status.value, state.is_loading)


@click.command("review")
@click.argument("source", type=click.File("r"), default="-")
@click.option(
    "--language",
    "-l",
    type=click.Choice([tag for tag, _ in SUPPORTED_LANGUAGES]),
    default=None,
    help="Language of the snippet. Overrides config file.",
)
@click.option(
    "--model",
    type=click.Choice(list(PROVIDERS)),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.option("--no-format", "no_format", is_flag=True, help="Do not reformat code blocks in the review.")
@click.option("--save", is_flag=True, help="Save the code, language and review as the current session.")
@click.option("--raw", is_flag=True, help="Print the review as plain text instead of rendered Markdown.")
@click.pass_context
def review_cmd(
    ctx,
    source,
    language: str | None,
    model: str | None,
    no_format: bool,
    save: bool,
    raw: bool,
):
    """Review the code in SOURCE (a file path, or - for stdin).

    \b
    The API key is taken from `snipreview key set`, or else from the
    environment:
      GEMINI_API_KEY / API_KEY   for --model gemini (default)
      ANTHROPIC_API_KEY          for --model anthropic
      OPENAI_API_KEY             for --model openai
    """
    config = dict(ctx.obj["config"])
    if model is not None:
        config["model"] = model
        config["env_credential"] = None
    if no_format:
        config["format_reviews"] = False
    store = ctx.obj["store"]

    code = source.read()
    language = language or config.get("language", "javascript")

    orchestrator = _build_orchestrator(config, store)
    orchestrator.subscribe(_log_transition)
    orchestrator.set_code(code)
    orchestrator.set_language(language)

    with console.status(f"Reviewing {language} code with {config['model']}..."):
        state = asyncio.run(orchestrator.submit_review())

    if state.status is ReviewStatus.ERROR:
        raise click.ClickException(state.error_message or "Review failed.")

    if raw:
        click.echo(state.result)
    else:
        console.print(Markdown(state.result))

    if state.formatting_status:
        console.print(f"[dim]{state.formatting_status}[/dim]")

    if save:
        snapshot = orchestrator.snapshot_session()
        SessionStore(store).save(
            SessionRecord(code=snapshot.code, language=snapshot.language, review_result=snapshot.review_result)
        )
        console.print("[green]Session saved.[/green]")
