"""CLI: polychat messages list|cycle|show|erase|delete|clear"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _get_messages():
    from polychat.cli.main import _get_messages
    return _get_messages()


def _message_or_exit(history, index: int):
    try:
        return history[index]
    except IndexError:
        console.print(f"[red]No message #{index}[/red]")
        raise SystemExit(1)


@click.group()
def messages():
    """Message history."""


@messages.command("list")
@click.option("--json-output", "--json", is_flag=True)
def messages_list(json_output: bool):
    """List sent messages."""
    history = _get_messages()
    if json_output:
        click.echo(json.dumps([m.model_dump(mode="json") for m in history], indent=2, ensure_ascii=False))
        return
    table = Table(title=f"Messages ({len(history)})")
    table.add_column("#", style="bold")
    table.add_column("Sent")
    table.add_column("Showing")
    table.add_column("Text")
    table.add_column("Variants", style="dim")
    for i, m in enumerate(history):
        table.add_row(
            str(i),
            m.sent_at.strftime("%Y-%m-%d %H:%M"),
            m.current.label,
            m.primary_text,
            ", ".join(v.code for v in m.variants),
        )
    console.print(table)


@messages.command("cycle")
@click.argument("index", type=int)
def messages_cycle(index: int):
    """Show the next language variant of a message."""
    history = _get_messages()
    _message_or_exit(history, index)
    variant = history.cycle(index)
    console.print(f"[cyan]{variant.label}:[/cyan] {variant.text}")


@messages.command("show")
@click.argument("index", type=int)
@click.argument("variant_index", type=int)
def messages_show(index: int, variant_index: int):
    """Jump to a specific language variant."""
    history = _get_messages()
    message = _message_or_exit(history, index)
    if not history.jump_to(index, variant_index):
        console.print(f"[red]Message #{index} has {len(message.variants)} variants.[/red]")
        raise SystemExit(1)
    console.print(f"[cyan]{message.current.label}:[/cyan] {message.primary_text}")


@messages.command("erase")
@click.argument("index", type=int, required=False)
def messages_erase(index: Optional[int]):
    """Drop translations, keeping only the original (all messages without INDEX)."""
    history = _get_messages()
    if index is not None:
        _message_or_exit(history, index)
    history.erase_translations(index)
    console.print("[green]Translations erased.[/green]")


@messages.command("delete")
@click.argument("index", type=int)
def messages_delete(index: int):
    """Delete one message."""
    history = _get_messages()
    _message_or_exit(history, index)
    history.delete(index)
    console.print(f"[green]Message #{index} deleted.[/green]")


@messages.command("clear")
@click.confirmation_option(prompt="Delete the whole message history?")
def messages_clear():
    """Delete every message."""
    _get_messages().clear()
    console.print("[green]History cleared.[/green]")
