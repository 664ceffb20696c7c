"""
Message store: the ordered list of sent messages, persisted as one JSON blob.

Loading reconciles records written by older clients (camelCase fields,
no variants, no cursor) into the current Message shape.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Iterator, Optional

from pydantic import ValidationError as PydanticValidationError

from polychat import ledger
from polychat.errors import PersistenceError
from polychat.languages import ORIGINAL, ORIGINAL_LABEL, UNKNOWN
from polychat.models.message import LanguageVariant, Message
from polychat.storage import KeyValueStore

logger = logging.getLogger("polychat.store")

MESSAGES_KEY = "chatMessages"


def _first(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value not in (None, ""):
            return value
    return None


def reconcile(raw: dict[str, Any]) -> Message:
    """Build a Message from a stored record of any schema generation."""
    stored = _first(raw, "variants", "languages")
    variants = [
        LanguageVariant.model_validate(v)
        for v in (stored if isinstance(stored, list) else [])
        if isinstance(v, dict)
    ]
    flag = raw.get("was_translated", raw.get("wasTranslated"))
    label = _first(raw, "current_label", "translatedToLanguage", "label")

    if not variants:
        text = _first(raw, "primary_text", "text", "reference_text", "englishText") or ""
        variants = [LanguageVariant(
            code=UNKNOWN if flag else ORIGINAL,
            label=label or ORIGINAL_LABEL,
            text=text,
        )]

    cursor = _first(raw, "cursor_index", "currentLangIndex")
    if isinstance(cursor, bool) or not isinstance(cursor, int) or not 0 <= cursor < len(variants):
        cursor = len(variants) - 1

    sent_at = _first(raw, "sent_at", "timestamp") or datetime.now(timezone.utc)

    return Message(
        primary_text=variants[cursor].text,
        reference_text=_first(raw, "reference_text", "englishText") or variants[0].text,
        sender=_first(raw, "sender", "from") or "user",
        sent_at=sent_at,
        was_translated=flag if isinstance(flag, bool) else len(variants) > 1,
        current_label=label,
        variants=variants,
        cursor_index=cursor,
        showing_reference=False,
    )


def decode(blob: str) -> list[Message]:
    try:
        data = json.loads(blob)
    except ValueError as e:
        raise PersistenceError(f"Stored messages are not valid JSON: {e}")
    if not isinstance(data, list):
        raise PersistenceError("Stored messages are not a list")
    try:
        return [reconcile(item) for item in data if isinstance(item, dict)]
    except (PydanticValidationError, TypeError, ValueError) as e:
        raise PersistenceError(f"Stored message failed validation: {e}")


def encode(messages: list[Message]) -> str:
    return json.dumps([m.model_dump(mode="json") for m in messages], ensure_ascii=False)


class MessageStore:
    def __init__(self, store: KeyValueStore, key: str = MESSAGES_KEY):
        self._store = store
        self._key = key
        self._messages: list[Message] = []

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    def load(self) -> list[Message]:
        """Replace the in-memory list with the persisted one. An unreadable blob yields an empty list."""
        try:
            blob = self._store.get(self._key)
            self._messages = decode(blob) if blob else []
        except PersistenceError as e:
            logger.error("Discarding stored messages: %s", e)
            self._messages = []
        return self.messages

    def save(self) -> bool:
        """Persist the current list. On failure the in-memory list is kept but not durable."""
        try:
            self._store.set(self._key, encode(self._messages))
            return True
        except (PersistenceError, TypeError, ValueError) as e:
            logger.error("Failed to save messages: %s", e)
            return False

    def append(self, message: Message) -> Message:
        self._messages.append(message)
        self.save()
        return message

    def replace_all(self, messages: list[Message]) -> None:
        self._messages = list(messages)
        self.save()

    def delete(self, index: int) -> Message:
        message = self._messages.pop(index)
        self.save()
        return message

    def clear(self) -> None:
        self._messages = []
        try:
            self._store.remove(self._key)
        except PersistenceError as e:
            logger.error("Failed to clear stored messages: %s", e)

    def cycle(self, index: int) -> LanguageVariant:
        variant = ledger.cycle(self._messages[index])
        self.save()
        return variant

    def jump_to(self, index: int, variant_index: int) -> bool:
        moved = ledger.jump_to(self._messages[index], variant_index)
        if moved:
            self.save()
        return moved

    def erase_translations(self, index: Optional[int] = None) -> None:
        """Drop every variant but the original, for one message or (index=None) all of them."""
        targets = self._messages if index is None else [self._messages[index]]
        for message in targets:
            ledger.erase_translations(message)
        self.save()
