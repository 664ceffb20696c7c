"""
Translation gateway client: one GET per translate() call, no retries, no cache.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from polychat.errors import InvalidRequest, TranslationFailed
from polychat.models.translation import GatewayEnvelope, LegacyEnvelope, SuccessEnvelope, TranslationResult
from polychat.transport.http import HttpClient

logger = logging.getLogger("polychat.gateway")

DEFAULT_SOURCE_LANGUAGE = "auto"


def parse_envelope(raw: Any) -> GatewayEnvelope:
    """Parse a gateway response into one of the known shapes. Anything else raises TranslationFailed."""
    if not isinstance(raw, dict):
        raise TranslationFailed("Translation failed", code="bad_response", details={"response": raw})
    try:
        return SuccessEnvelope.model_validate(raw)
    except PydanticValidationError:
        pass
    try:
        return LegacyEnvelope.model_validate(raw)
    except PydanticValidationError:
        pass
    message = raw.get("message")
    raise TranslationFailed(
        message if isinstance(message, str) and message else "Translation failed",
        details={"response": raw},
    )


def to_result(envelope: GatewayEnvelope) -> TranslationResult:
    if isinstance(envelope, LegacyEnvelope):
        return TranslationResult(translated_text=envelope.t)
    return TranslationResult(
        translated_text=envelope.translated_text,
        source_text=envelope.source_text,
        resolved_from=envelope.from_,
        resolved_to=envelope.to,
    )


class TranslationGateway:
    def __init__(self, http: HttpClient, default_source: str = DEFAULT_SOURCE_LANGUAGE):
        self._http = http
        self._default_source = default_source

    async def translate(
        self, text: str, target_lang: Optional[str], source_lang: Optional[str] = None,
    ) -> TranslationResult:
        if not text or not target_lang:
            raise InvalidRequest("Missing text or target language")
        source = source_lang or self._default_source
        logger.debug("Translating %d chars %s -> %s", len(text), source, target_lang)
        raw = await self._http.get({"text": text, "from": source, "to": target_lang})
        return to_result(parse_envelope(raw))

    async def close(self) -> None:
        await self._http.close()
