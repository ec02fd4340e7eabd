"""Test the httpx transport against a mock server."""

import json

import httpx
import pytest

from msgdispatch import create_sender
from msgdispatch.config import DispatchConfig
from msgdispatch.errors import TransportError
from msgdispatch.gateway.http import HttpTransport
from msgdispatch.messages.encoding import select_encoding
from msgdispatch.messages.models import MessageRequest


def _transport(handler) -> HttpTransport:
    return HttpTransport(
        "https://api.example.com/", app_id="app", token="tok",
        client_transport=httpx.MockTransport(handler),
    )


async def test_json_post():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "m1", "channel_id": "c1", "content": "hi", "pinned": False})

    async with _transport(handler) as transport:
        resp = await transport.post("/channels/c1/messages", select_encoding(MessageRequest(content="hi")))

    assert resp.id == "m1"
    assert resp.channel_id == "c1"
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.example.com/channels/c1/messages"
    assert request.headers["Authorization"] == "Bot app.tok"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {"content": "hi"}


async def test_multipart_post():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "m2"})

    body = select_encoding(MessageRequest(content="pic", file_image=b"img"))
    async with _transport(handler) as transport:
        await transport.post("/dms/g1/messages", body)

    assert seen[0].headers["Content-Type"] == body.headers["Content-Type"]
    assert seen[0].content == body.content


async def test_unknown_response_fields_kept():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": "m3", "seqInChannel": "7", "extra_flag": 1})

    async with _transport(handler) as transport:
        resp = await transport.post("/channels/c1/messages", select_encoding(MessageRequest(content="x")))
    assert resp.seq_in_channel == "7"
    assert resp.model_extra == {"extra_flag": 1}


async def test_error_status_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"code": 11264, "message": "no permission"})

    async with _transport(handler) as transport:
        with pytest.raises(TransportError) as exc_info:
            await transport.post("/channels/c1/messages", select_encoding(MessageRequest(content="x")))
    assert exc_info.value.status_code == 403
    assert "no permission" in exc_info.value.body


async def test_network_error_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _transport(handler) as transport:
        with pytest.raises(TransportError) as exc_info:
            await transport.post("/channels/c1/messages", select_encoding(MessageRequest(content="x")))
    assert exc_info.value.status_code is None


async def test_sender_over_http():
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json={"id": request.url.path.split("/")[2]})

    async with _transport(handler) as transport:
        resps = await create_sender(transport).channel(["c1", "c2"], "hi")
    assert [r.id for r in resps] == ["c1", "c2"]
    assert paths == ["/channels/c1/messages", "/channels/c2/messages"]


def test_from_config_uses_sandbox_url():
    config = DispatchConfig(sandbox=True, app_id="app", token="tok")
    transport = HttpTransport.from_config(config)
    assert transport._base_url == "https://sandbox.api.sgroup.qq.com"


def test_no_auth_header_without_token():
    assert HttpTransport("https://api.example.com")._auth_headers() == {}


async def test_non_json_reply_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>ok</html>")

    async with _transport(handler) as transport:
        with pytest.raises(TransportError) as exc_info:
            await transport.post("/channels/c1/messages", select_encoding(MessageRequest(content="x")))
    assert exc_info.value.status_code == 200
    assert exc_info.value.body == "<html>ok</html>"


async def test_non_object_reply_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=["not", "a", "message"])

    async with _transport(handler) as transport:
        with pytest.raises(TransportError):
            await transport.post("/channels/c1/messages", select_encoding(MessageRequest(content="x")))


async def test_partial_nested_reply_accepted():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={
            "id": "m1",
            "author": {"username": "bot"},
            "ark": {"kv": [{"key": "title"}]},
            "message_reference": {},
        })

    async with _transport(handler) as transport:
        resp = await transport.post("/channels/c1/messages", select_encoding(MessageRequest(content="x")))
    assert resp.author.username == "bot"
    assert resp.author.id == ""
    assert resp.ark.template_id is None
    assert resp.message_reference.message_id == ""
