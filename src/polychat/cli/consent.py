"""CLI: polychat consent grant|revoke|status"""

import click
from rich.console import Console

console = Console()


def _get_consent():
    from polychat.cli.main import _get_consent
    return _get_consent()


@click.group()
def consent():
    """Translation consent."""


@consent.command("grant")
@click.option("-y", "--yes", is_flag=True, help="Skip the confirmation prompt")
def consent_grant(yes: bool):
    """Allow text to be sent to the translation provider."""
    gate = _get_consent()
    if not yes and not click.confirm(f"Send message text to {gate.provider} for translation?"):
        console.print("[yellow]Consent not granted.[/yellow]")
        return
    record = gate.grant()
    console.print(f"[green]Consent granted (version {record.version}).[/green]")


@consent.command("revoke")
def consent_revoke():
    """Withdraw consent."""
    _get_consent().revoke()
    console.print("[green]Consent revoked.[/green]")


@consent.command("status")
def consent_status():
    """Show the stored consent record."""
    gate = _get_consent()
    record = gate.details()
    if record is None:
        console.print("[yellow]No consent on record. Run `polychat consent grant`.[/yellow]")
    elif gate.has_consent():
        console.print(f"[green]Granted[/green] {record.granted_at.isoformat()} "
                      f"(version {record.version}, {record.provider or 'unknown provider'})")
    else:
        console.print(f"[yellow]Outdated consent (version {record.version}, "
                      f"current {gate.version}). Grant again.[/yellow]")
