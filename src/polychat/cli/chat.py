"""CLI: polychat translate, polychat chat"""

import json
from typing import Optional

import click
from rich.console import Console

from polychat.errors import PolychatError

console = Console()

CHAT_HELP = """[dim]Type a message, then:
  /to <code>     translate to a language      /recv  translate to the receiver language
  /mine          translate to my language     /edit <text>  edit the preview
  /revert        show the original again      /clear  drop the preview
  /send          send the translation         /orig  send the original
  /cancel        discard the draft            /quit  exit[/dim]
"""


def _get_client(**kwargs):
    from polychat.cli.main import _get_client
    return _get_client(**kwargs)


def _run(coro):
    from polychat.cli.main import _run
    return _run(coro)


@click.command("translate")
@click.argument("text")
@click.option("-t", "--to", "target", required=True, help="Target language code")
@click.option("-f", "--from", "source", default=None, help="Source language code")
@click.option("--json-output", "--json", is_flag=True)
def translate_cmd(text: str, target: str, source: Optional[str], json_output: bool):
    """Translate TEXT once, without creating a message."""

    async def _translate():
        client = _get_client()
        try:
            with console.status("Translating..."):
                result = await client.translate(text, target, source)
        except PolychatError as e:
            console.print(f"[red]{e}[/red]")
            raise SystemExit(1)
        finally:
            await client.close()
        if json_output:
            click.echo(json.dumps(result.model_dump(), ensure_ascii=False))
        else:
            console.print(f"[green]{result.resolved_to or target}:[/green] {result.translated_text}")

    _run(_translate())


@click.command("chat")
def chat_cmd():
    """Interactive compose session."""

    async def _ask_consent() -> bool:
        return click.confirm("Translation sends your text to a third-party provider. Allow?")

    async def _chat():
        client = _get_client(consent_prompt=_ask_consent, on_notice=lambda text: console.print(f"[dim]{text}[/dim]"))
        draft = client.draft
        if draft.restore_pending():
            console.print(f"[dim]Restored draft: {draft.typed_text}[/dim]")
        console.print(CHAT_HELP)
        try:
            while True:
                line = click.prompt("You", prompt_suffix=": ")
                cmd, _, arg = line.partition(" ")
                try:
                    if cmd in ("/quit", "/exit"):
                        draft.stash_pending()
                        break
                    elif cmd == "/to":
                        await draft.translate(arg.strip())
                    elif cmd == "/recv":
                        await draft.translate_to_receiver()
                    elif cmd == "/mine":
                        await draft.translate_to_my_language()
                    elif cmd == "/edit":
                        draft.save_preview_edits(arg)
                    elif cmd == "/revert":
                        draft.revert_preview_to_original()
                    elif cmd == "/clear":
                        draft.clear_preview_and_translation()
                    elif cmd == "/cancel":
                        draft.cancel()
                        console.print("[dim]Draft discarded.[/dim]")
                    elif cmd == "/send":
                        message = await draft.send_translated()
                        console.print(f"[green]Sent ({message.current.label}):[/green] {message.primary_text}")
                    elif cmd == "/orig":
                        message = await draft.send_original()
                        console.print(f"[green]Sent:[/green] {message.primary_text}")
                    else:
                        draft.type(line)
                        continue
                except PolychatError as e:
                    console.print(f"[red]{e}[/red]")
                    continue
                if draft.pending_preview_text:
                    console.print(f"[cyan]{draft.preview_label or 'Preview'}:[/cyan] {draft.pending_preview_text}")
        except (KeyboardInterrupt, EOFError, click.Abort):
            draft.stash_pending()
        finally:
            await client.close()

    _run(_chat())
