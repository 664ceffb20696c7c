"""
Language variant ledger: cursor operations over a message's variant list.

Every function leaves the message with
    0 <= cursor_index < len(variants)  and  primary_text == variants[cursor_index].text
Variants are never removed one at a time; erase_translations truncates to the original.
"""

from datetime import datetime
from typing import Optional

from polychat.models.message import LanguageVariant, Message


def _sync(message: Message) -> None:
    message.primary_text = message.variants[message.cursor_index].text


def append(message: Message, variant: LanguageVariant) -> None:
    """Add a variant at the end. The cursor stays where it is; codes are not deduplicated."""
    message.variants.append(variant)


def cycle(message: Message) -> LanguageVariant:
    """Advance to the next variant, wrapping from last to first."""
    message.cursor_index = (message.cursor_index + 1) % len(message.variants)
    _sync(message)
    message.current_label = message.current.label
    return message.current


def jump_to(message: Message, index: int) -> bool:
    if not 0 <= index < len(message.variants):
        return False
    message.cursor_index = index
    _sync(message)
    message.current_label = message.current.label
    return True


def erase_translations(message: Message) -> None:
    del message.variants[1:]
    message.cursor_index = 0
    _sync(message)
    message.was_translated = False
    message.current_label = None


def collapse_by_code(variants: list[LanguageVariant]) -> list[LanguageVariant]:
    """Keep the last entry per code, emitted at the code's first-seen position.

    [A:"1", B:"2", A:"3"] -> [A:"3", B:"2"]
    """
    latest: dict[str, LanguageVariant] = {}
    order: list[str] = []
    for v in variants:
        if v.code not in latest:
            order.append(v.code)
        latest[v.code] = v
    return [latest[code] for code in order]


def index_of(variants: list[LanguageVariant], code: str) -> Optional[int]:
    for i, v in enumerate(variants):
        if v.code == code:
            return i
    return None


def build_message(
    variants: list[LanguageVariant],
    cursor_index: int,
    reference_text: str,
    sender: str = "user",
    sent_at: Optional[datetime] = None,
    was_translated: Optional[bool] = None,
) -> Message:
    """Construct a message that satisfies the ledger invariants. An out-of-range cursor is clamped.

    was_translated defaults to whether any variant beyond the original exists.
    """
    if not variants:
        raise ValueError("a message needs at least one variant")
    if was_translated is None:
        was_translated = len(variants) > 1
    cursor = min(max(cursor_index, 0), len(variants) - 1)
    fields = {"sent_at": sent_at} if sent_at is not None else {}
    return Message(
        primary_text=variants[cursor].text,
        reference_text=reference_text,
        sender=sender,
        was_translated=was_translated,
        current_label=variants[cursor].label if cursor > 0 else None,
        variants=list(variants),
        cursor_index=cursor,
        **fields,
    )
