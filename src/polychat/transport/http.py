"""
REST HTTP client for the translation gateway.

The gateway is a single endpoint answering GET requests with a JSON body.
Every transport problem surfaces as TranslationFailed.
"""

from typing import Any, Optional

import httpx

from polychat.errors import TranslationFailed

DEFAULT_GATEWAY_URL = (
    "https://script.google.com/macros/s/"
    "AKfycbyxnbC6LBpbtdMw2rLVqCRvqbHkT97CPQo9Ta9by1QpCMBH25BE6edivkNj5_dYp1qj/exec"
)


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_GATEWAY_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url
        self._client = httpx.AsyncClient(
            headers={"User-Agent": "polychat-sdk/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def get(self, params: Optional[dict[str, str]] = None) -> Any:
        try:
            resp = await self._client.get(self._base_url, params=params)
        except httpx.HTTPError as e:
            raise TranslationFailed(f"Network error: {e}", code="network_error")
        if resp.status_code >= 400:
            raise TranslationFailed(f"HTTP {resp.status_code}: {resp.text[:200]}", code="http_error")
        try:
            return resp.json()
        except ValueError:
            raise TranslationFailed(f"Gateway returned non-JSON body: {resp.text[:200]}", code="bad_response")

    async def close(self) -> None:
        await self._client.aclose()
