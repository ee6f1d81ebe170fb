"""CLI interface for contextfit."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from contextfit.budget.selector import ContextWindowManager
from contextfit.config import BudgetConfig, load_config
from contextfit.conversation.loader import Conversation, load_conversation
from contextfit.conversation.types import Message
from contextfit.utils.logging import setup_logging

console = Console()


def _load_conversation_or_fail(path: Path) -> Conversation:
    try:
        return load_conversation(path)
    except (FileNotFoundError, ValidationError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid conversation {path}: {e}") from e


def _resolve_budget(
    config_path: Optional[str],
    model: Optional[str],
    max_context_tokens: Optional[int],
    max_response_tokens: Optional[int],
) -> BudgetConfig:
    """Merge the config file (if any) with command line overrides."""
    try:
        config = load_config(Path(config_path)) if config_path else BudgetConfig()
        overrides = {
            key: value
            for key, value in {
                "model": model,
                "max_context_tokens": max_context_tokens,
                "max_response_tokens": max_response_tokens,
            }.items()
            if value is not None
        }
        return BudgetConfig(**{**config.model_dump(), **overrides})
    except (FileNotFoundError, ValidationError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid budget config: {e}") from e


def _preview(message: Message, width: int = 60) -> str:
    if message.is_text:
        text = message.content.text.replace("\n", " ")
        return text if len(text) <= width else text[: width - 3] + "..."
    return f"<image {message.content.mime_type}>"


def _as_dict(message: Message) -> dict:
    entry = {"author": message.author.value}
    if message.is_text:
        entry["text"] = message.content.text
    else:
        data = message.content.data
        entry["image"] = data if isinstance(data, str) else f"<{len(data)} bytes>"
    return entry


@click.group()
@click.version_option(version="0.1.0")
def main():
    """contextfit — Fit chat history into a model's context window."""
    pass


@main.command()
@click.argument("conversation", type=click.Path(exists=True))
@click.option("--model", "-m", type=str, default=None, help="Target model id")
@click.option("--verbose", "-v", is_flag=True, help="Verbose logging")
def count(conversation: str, model: Optional[str], verbose: bool):
    """Show the token cost of every message in a conversation."""
    setup_logging(verbose)
    convo = _load_conversation_or_fail(Path(conversation))
    config = _resolve_budget(None, model, None, None)
    manager = ContextWindowManager(config.model)

    table = Table(title=f"Token costs — {config.model}")
    table.add_column("#", style="dim")
    table.add_column("Author", style="cyan")
    table.add_column("Content")
    table.add_column("Tokens", style="green", justify="right")

    total = 0
    if convo.prompt is not None:
        cost = manager.message_cost(convo.prompt)
        total += cost
        table.add_row("prompt", convo.prompt.author.value, _preview(convo.prompt), str(cost))
    for index, message in enumerate(convo.messages, start=1):
        cost = manager.message_cost(message)
        total += cost
        table.add_row(str(index), message.author.value, _preview(message), str(cost))
    table.add_row("", "", "[bold]Total[/bold]", f"[bold]{total:,}[/bold]")

    console.print(table)


@main.command()
@click.argument("conversation", type=click.Path(exists=True))
@click.option("--config", "-c", "config_path", type=click.Path(), default=None, help="Budget config YAML")
@click.option("--model", "-m", type=str, default=None, help="Target model id")
@click.option("--max-context-tokens", type=int, default=None, help="Hard context ceiling")
@click.option("--max-response-tokens", type=int, default=None, help="Tokens reserved for the reply")
@click.option("--json", "as_json", is_flag=True, help="Print kept messages as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Verbose logging")
def trim(
    conversation: str,
    config_path: Optional[str],
    model: Optional[str],
    max_context_tokens: Optional[int],
    max_response_tokens: Optional[int],
    as_json: bool,
    verbose: bool,
):
    """Drop the oldest messages until the conversation fits the budget."""
    setup_logging(verbose)
    convo = _load_conversation_or_fail(Path(conversation))
    config = _resolve_budget(config_path, model, max_context_tokens, max_response_tokens)

    manager = ContextWindowManager(config.model)
    budget = manager.allocate_budget(
        convo.prompt, config.max_context_tokens, config.max_response_tokens
    )
    kept = manager.fit_messages(convo.messages, budget)

    if as_json:
        click.echo(json.dumps([_as_dict(m) for m in kept], ensure_ascii=False, indent=2))
        return

    dropped = len(convo.messages) - len(kept)
    console.print(
        f"[bold]{config.model}[/bold]: kept [green]{len(kept)}[/green], "
        f"dropped [red]{dropped}[/red] of {len(convo.messages)} messages "
        f"({budget.available_for_history:,} of {budget.total_tokens:,} tokens "
        f"available for history)"
    )
    table = Table()
    table.add_column("Author", style="cyan")
    table.add_column("Content")
    table.add_column("Tokens", style="green", justify="right")
    for message in kept:
        table.add_row(message.author.value, _preview(message), str(manager.message_cost(message)))
    console.print(table)


if __name__ == "__main__":
    main()
