"""
Message models: a sent message and its ordered language variants.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from polychat.languages import UNKNOWN


def _now() -> datetime:
    return datetime.now(timezone.utc)


class LanguageVariant(BaseModel):
    code: str = UNKNOWN    # language code or sentinel ("orig", "recv_en", "back_en", ...)
    label: str = ""
    text: str = ""


class Message(BaseModel):
    primary_text: str            # always variants[cursor_index].text
    reference_text: str          # best-known original text
    sender: str = "user"
    sent_at: datetime = Field(default_factory=_now)
    was_translated: bool = False
    current_label: Optional[str] = None
    variants: list[LanguageVariant]
    cursor_index: int = 0
    showing_reference: bool = False

    @property
    def current(self) -> LanguageVariant:
        return self.variants[self.cursor_index]
