"""CLI commands against a temporary storage file."""

import pytest
from click.testing import CliRunner

from polychat import ledger
from polychat.cli import main as cli_main
from polychat.config import Settings
from polychat.models.message import LanguageVariant
from polychat.storage import FileStore
from polychat.store import MessageStore


@pytest.fixture
def data_file(tmp_path, monkeypatch):
    path = tmp_path / "storage.json"
    monkeypatch.setattr(cli_main, "load_settings", lambda: Settings(data_file=str(path)))
    return path


def seed(path):
    messages = MessageStore(FileStore(path))
    variants = [
        LanguageVariant(code="orig", label="Original", text="Hello"),
        LanguageVariant(code="fr", label="French", text="Bonjour"),
    ]
    messages.append(ledger.build_message(variants, 1, reference_text="Hello"))


def test_consent_grant_and_status(data_file):
    runner = CliRunner()
    result = runner.invoke(cli_main.main, ["consent", "status"])
    assert "No consent on record" in result.output

    result = runner.invoke(cli_main.main, ["consent", "grant", "--yes"])
    assert result.exit_code == 0
    assert "Consent granted" in result.output

    result = runner.invoke(cli_main.main, ["consent", "status"])
    assert "Granted" in result.output

    runner.invoke(cli_main.main, ["consent", "revoke"])
    result = runner.invoke(cli_main.main, ["consent", "status"])
    assert "No consent on record" in result.output


def test_consent_grant_declined(data_file):
    result = CliRunner().invoke(cli_main.main, ["consent", "grant"], input="n\n")
    assert "Consent not granted" in result.output


def test_messages_cycle_and_erase(data_file):
    seed(data_file)
    runner = CliRunner()

    result = runner.invoke(cli_main.main, ["messages", "cycle", "0"])
    assert result.exit_code == 0
    assert "Hello" in result.output

    result = runner.invoke(cli_main.main, ["messages", "show", "0", "1"])
    assert "Bonjour" in result.output

    result = runner.invoke(cli_main.main, ["messages", "erase"])
    assert result.exit_code == 0
    [message] = MessageStore(FileStore(data_file)).load()
    assert len(message.variants) == 1


def test_messages_bad_index(data_file):
    result = CliRunner().invoke(cli_main.main, ["messages", "cycle", "4"])
    assert result.exit_code == 1
    assert "No message #4" in result.output


def test_translate_requires_consent(data_file):
    result = CliRunner().invoke(cli_main.main, ["translate", "Hello", "--to", "fr"])
    assert result.exit_code == 1
    assert "consent" in result.output.lower()


def test_storage_commands_do_not_open_a_client(data_file, monkeypatch):
    def no_client(**kwargs):
        raise AssertionError("storage-only command built a gateway client")

    monkeypatch.setattr(cli_main, "_get_client", no_client)
    seed(data_file)
    runner = CliRunner()

    for args in (["consent", "grant", "--yes"], ["consent", "status"], ["messages", "list"], ["messages", "cycle", "0"]):
        result = runner.invoke(cli_main.main, args)
        assert result.exit_code == 0, result.output
