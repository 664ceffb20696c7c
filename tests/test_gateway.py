"""Translation gateway: request shape and envelope parsing."""

import httpx
import pytest

from polychat.errors import InvalidRequest, TranslationFailed
from polychat.gateway import TranslationGateway, parse_envelope
from polychat.models.translation import LegacyEnvelope, SuccessEnvelope
from polychat.transport.http import HttpClient

GATEWAY_URL = "https://gateway.test/exec"


def make_gateway(handler, requests=None):
    def recording(request: httpx.Request):
        if requests is not None:
            requests.append(request)
        return handler(request)

    http = HttpClient(base_url=GATEWAY_URL, transport=httpx.MockTransport(recording))
    return TranslationGateway(http)


def test_parse_success_envelope():
    env = parse_envelope({"success": True, "translatedText": "Bonjour", "sourceText": "Hello", "from": "en", "to": "fr"})
    assert isinstance(env, SuccessEnvelope)
    assert env.from_ == "en"


def test_parse_legacy_envelope():
    assert isinstance(parse_envelope({"t": "Bonjour"}), LegacyEnvelope)


@pytest.mark.parametrize("raw", [
    {"foo": 1},
    {"translatedText": "Bonjour"},
    {"success": True, "translatedText": ""},
    {"t": ""},
    ["Bonjour"],
    None,
])
def test_parse_rejects_unknown_shapes(raw):
    with pytest.raises(TranslationFailed):
        parse_envelope(raw)


class TestTranslate:

    @pytest.mark.asyncio
    async def test_success_envelope(self):
        requests = []
        gateway = make_gateway(lambda r: httpx.Response(200, json={
            "success": True, "sourceText": "Hello", "translatedText": "Bonjour", "from": "en", "to": "fr",
        }), requests)
        result = await gateway.translate("Hello", "fr")
        assert result.translated_text == "Bonjour"
        assert result.source_text == "Hello"
        assert result.resolved_from == "en"
        assert result.resolved_to == "fr"

        assert len(requests) == 1
        params = requests[0].url.params
        assert requests[0].method == "GET"
        assert params["text"] == "Hello"
        assert params["from"] == "auto"
        assert params["to"] == "fr"

    @pytest.mark.asyncio
    async def test_explicit_source_language(self):
        requests = []
        gateway = make_gateway(lambda r: httpx.Response(200, json={"t": "Hola"}), requests)
        await gateway.translate("こんにちは", "es", "ja")
        assert requests[0].url.params["from"] == "ja"
        assert requests[0].url.params["text"] == "こんにちは"

    @pytest.mark.asyncio
    async def test_legacy_envelope(self):
        gateway = make_gateway(lambda r: httpx.Response(200, json={"t": "Bonjour"}))
        result = await gateway.translate("Hello", "fr")
        assert result.translated_text == "Bonjour"
        assert result.source_text is None
        assert result.resolved_from is None
        assert result.resolved_to is None

    @pytest.mark.asyncio
    async def test_provider_error_message_is_kept(self):
        gateway = make_gateway(lambda r: httpx.Response(200, json={"success": False, "message": "quota exceeded"}))
        with pytest.raises(TranslationFailed, match="quota exceeded"):
            await gateway.translate("Hello", "fr")

    @pytest.mark.asyncio
    async def test_unknown_shape_fails_closed(self):
        gateway = make_gateway(lambda r: httpx.Response(200, json={"result": "Bonjour"}))
        with pytest.raises(TranslationFailed, match="Translation failed"):
            await gateway.translate("Hello", "fr")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text,target", [("", "fr"), ("Hello", ""), ("Hello", None)])
    async def test_invalid_request_makes_no_call(self, text, target):
        requests = []
        gateway = make_gateway(lambda r: httpx.Response(200, json={"t": "x"}), requests)
        with pytest.raises(InvalidRequest):
            await gateway.translate(text, target)
        assert requests == []

    @pytest.mark.asyncio
    async def test_http_error(self):
        gateway = make_gateway(lambda r: httpx.Response(500, text="boom"))
        with pytest.raises(TranslationFailed) as exc:
            await gateway.translate("Hello", "fr")
        assert exc.value.code == "http_error"

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        gateway = make_gateway(lambda r: httpx.Response(200, text="<html>login</html>"))
        with pytest.raises(TranslationFailed) as exc:
            await gateway.translate("Hello", "fr")
        assert exc.value.code == "bad_response"

    @pytest.mark.asyncio
    async def test_network_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        gateway = make_gateway(refuse)
        with pytest.raises(TranslationFailed) as exc:
            await gateway.translate("Hello", "fr")
        assert exc.value.code == "network_error"

    @pytest.mark.asyncio
    async def test_one_request_per_call(self):
        requests = []
        gateway = make_gateway(lambda r: httpx.Response(200, json={"t": "x"}), requests)
        await gateway.translate("a", "fr")
        await gateway.translate("a", "fr")
        assert len(requests) == 2
        await gateway.close()
