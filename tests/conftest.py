"""Shared fixtures: in-memory storage and a fake translation gateway."""

import asyncio
from typing import Optional

import pytest

from polychat.config import Settings
from polychat.consent import ConsentGate
from polychat.draft import DraftSession
from polychat.models.translation import TranslationResult
from polychat.storage import MemoryStore
from polychat.store import MessageStore


class FakeGateway:
    """Answers from a target -> text table; an Exception value is raised instead."""

    def __init__(self, replies: Optional[dict] = None):
        self.replies = replies or {}
        self.calls: list[tuple[str, Optional[str], Optional[str]]] = []

    async def translate(self, text, target_lang, source_lang=None):
        self.calls.append((text, target_lang, source_lang))
        reply = self.replies.get(target_lang, f"{text} [{target_lang}]")
        if isinstance(reply, Exception):
            raise reply
        return TranslationResult(translated_text=reply, resolved_to=target_lang)


class BlockingGateway(FakeGateway):
    """Holds every request until release is set."""

    def __init__(self, replies: Optional[dict] = None):
        super().__init__(replies)
        self.release = asyncio.Event()

    async def translate(self, text, target_lang, source_lang=None):
        await self.release.wait()
        return await super().translate(text, target_lang, source_lang)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def consent(store):
    gate = ConsentGate(store)
    gate.grant()
    return gate


@pytest.fixture
def messages(store):
    return MessageStore(store)


@pytest.fixture
def notices():
    return []


def make_session(gateway, consent, messages, notices=None, **settings):
    return DraftSession(
        gateway, consent, messages, Settings(**settings),
        store=messages._store,
        on_notice=notices.append if notices is not None else None,
    )
