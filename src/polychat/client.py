"""
Polychat / AsyncPolychat: main SDK clients.
"""

import asyncio
from typing import Any, Optional

import httpx

from polychat.config import Settings, load_settings
from polychat.consent import ConsentGate
from polychat.draft import ConsentPrompt, DraftSession, Notifier
from polychat.gateway import TranslationGateway
from polychat.models.message import LanguageVariant, Message
from polychat.models.translation import TranslationResult
from polychat.storage import FileStore, KeyValueStore
from polychat.store import MessageStore
from polychat.transport.http import HttpClient


class AsyncPolychat:
    """Async polychat client (primary)."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[KeyValueStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        consent_prompt: Optional[ConsentPrompt] = None,
        on_notice: Optional[Notifier] = None,
    ):
        self.settings = settings or load_settings()
        self.store: KeyValueStore = store if store is not None else FileStore(self.settings.data_file)

        self.http = HttpClient(base_url=self.settings.gateway_url, timeout=self.settings.timeout, transport=transport)
        self.gateway = TranslationGateway(self.http, default_source=self.settings.source_language)
        self.consent = ConsentGate(
            self.store, version=self.settings.consent_version, provider=self.settings.consent_provider,
        )
        self.messages = MessageStore(self.store)
        self.messages.load()
        self.draft = DraftSession(
            self.gateway, self.consent, self.messages, self.settings,
            store=self.store, consent_prompt=consent_prompt, on_notice=on_notice,
        )

    async def translate(
        self, text: str, target_lang: str, source_lang: Optional[str] = None,
    ) -> TranslationResult:
        """One-off translation outside a draft. Raises ConsentRequired without consent."""
        self.consent.require()
        return await self.gateway.translate(text, target_lang, source_lang)

    async def compose(self, text: str, target_lang: Optional[str] = None) -> Message:
        """Convenience: type, translate (to the receiver language by default), send."""
        self.draft.type(text)
        await self.draft.translate(target_lang or self.settings.receiver_language)
        return await self.draft.send_translated()

    async def close(self) -> None:
        await self.gateway.close()


class Polychat:
    """Sync wrapper around AsyncPolychat. Runs the event loop internally."""

    def __init__(self, **kwargs: Any):
        self._async = AsyncPolychat(**kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def settings(self) -> Settings:
        return self._async.settings

    @property
    def consent(self) -> ConsentGate:
        return self._async.consent

    @property
    def messages(self) -> MessageStore:
        return self._async.messages

    @property
    def draft(self) -> DraftSession:
        return self._async.draft

    def translate(self, text: str, target_lang: str, source_lang: Optional[str] = None) -> TranslationResult:
        return self._run(self._async.translate(text, target_lang, source_lang))

    def translate_draft(self, target_lang: str, source_lang: Optional[str] = None) -> Optional[LanguageVariant]:
        return self._run(self._async.draft.translate(target_lang, source_lang))

    def send_translated(self) -> Message:
        return self._run(self._async.draft.send_translated())

    def send_original(self) -> Message:
        return self._run(self._async.draft.send_original())

    def compose(self, text: str, target_lang: Optional[str] = None) -> Message:
        return self._run(self._async.compose(text, target_lang))

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()
