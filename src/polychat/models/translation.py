"""
Gateway response envelopes: a tagged union of the two known shapes.

Current:  {"success": true, "translatedText": "...", "sourceText": "...", "from": "ja", "to": "es"}
Legacy:   {"t": "..."}
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SuccessEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["success"] = "success"
    success: Literal[True]
    translated_text: str = Field(alias="translatedText", min_length=1)
    source_text: Optional[str] = Field(default=None, alias="sourceText")
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None


class LegacyEnvelope(BaseModel):
    kind: Literal["legacy"] = "legacy"
    t: str = Field(min_length=1)


GatewayEnvelope = Union[SuccessEnvelope, LegacyEnvelope]


class TranslationResult(BaseModel):
    translated_text: str
    source_text: Optional[str] = None
    resolved_from: Optional[str] = None
    resolved_to: Optional[str] = None
