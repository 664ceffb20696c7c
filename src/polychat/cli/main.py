"""
polychat CLI: `polychat` command.

Commands:
  polychat consent <cmd>     Grant, revoke or inspect translation consent
  polychat translate <text>  One-off translation
  polychat messages <cmd>    Browse and edit the message history
  polychat chat              Interactive compose REPL
  polychat config <cmd>      Show or change settings
"""

import asyncio

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install polychat[cli]")

from polychat.client import AsyncPolychat
from polychat.config import Settings, load_settings, save_settings
from polychat.consent import ConsentGate
from polychat.storage import FileStore
from polychat.store import MessageStore

console = Console()


def _get_client(**kwargs) -> AsyncPolychat:
    return AsyncPolychat(settings=load_settings(), **kwargs)


def _get_consent() -> ConsentGate:
    settings = load_settings()
    return ConsentGate(
        FileStore(settings.data_file), version=settings.consent_version, provider=settings.consent_provider,
    )


def _get_messages() -> MessageStore:
    messages = MessageStore(FileStore(load_settings().data_file))
    messages.load()
    return messages


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
def main():
    """polychat CLI: chat messages with their translations."""


@click.group()
def config():
    """Settings (~/.polychat/config.json)."""


@config.command("show")
def config_show():
    """Print the effective settings."""
    for key, value in load_settings().model_dump().items():
        console.print(f"[bold]{key}[/bold] = {value}")


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str):
    """Change one setting."""
    if key not in Settings.model_fields:
        console.print(f"[red]Unknown setting: {key}[/red]")
        raise SystemExit(1)
    settings = load_settings()
    updated = Settings.model_validate({**settings.model_dump(), key: value})
    save_settings(updated)
    console.print(f"[green]{key} = {getattr(updated, key)}[/green]")


# Register subcommands from separate modules
from polychat.cli.consent import consent
from polychat.cli.chat import chat_cmd, translate_cmd
from polychat.cli.messages import messages

main.add_command(config)
main.add_command(consent)
main.add_command(translate_cmd)
main.add_command(chat_cmd)
main.add_command(messages)


if __name__ == "__main__":
    main()
