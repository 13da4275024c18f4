from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from cloco_client.config_types import TransportConfig
from cloco_client.errors import ApiError, AuthError, InvalidResponseError
from cloco_client.errors_utils import parse_api_error_detail
from cloco_client.payload import PayloadEncoding
from cloco_client.transport import NO_BODY, Transport


def _config(handler, encoding=PayloadEncoding.JSON) -> TransportConfig:
    return TransportConfig(
        base_url="https://api.example/",
        headers={"Authorization": "Bearer T"},
        encoding=encoding,
        http_transport=httpx.MockTransport(handler),
    )


def _request(handler, encoding=PayloadEncoding.JSON, method="GET", body=NO_BODY):
    cfg = _config(handler, encoding)

    async def _run():
        async with Transport(cfg) as t:
            return await t.request(method, "/x", body=body)

    return asyncio.run(_run())


def test_empty_json_body_decodes_to_none() -> None:
    response = _request(lambda _r: httpx.Response(204))
    assert response.status_code == 204
    assert response.body is None


def test_raw_string_response_is_returned_as_text() -> None:
    response = _request(
        lambda r: httpx.Response(200, text=r.content.decode("utf-8").upper()),
        encoding=PayloadEncoding.RAW_STRING,
        method="PUT",
        body="a=b",
    )
    assert response.body == "A=B"


def test_raw_string_response_is_not_parsed() -> None:
    response = _request(lambda _r: httpx.Response(200, text="{not json"), encoding=PayloadEncoding.RAW_STRING)
    assert response.body == "{not json"


def test_invalid_json_raises_invalid_response() -> None:
    with pytest.raises(InvalidResponseError):
        _request(lambda _r: httpx.Response(200, text="{not json"))


def test_forbidden_raises_auth_error_with_details() -> None:
    with pytest.raises(AuthError) as exc_info:
        _request(lambda _r: httpx.Response(403, json={"error_description": "scope missing", "code": 7}))
    assert exc_info.value.status_code == 403
    assert str(exc_info.value) == "scope missing"
    assert parse_api_error_detail(exc_info.value.details) == {"error_description": "scope missing", "code": 7}


def test_error_without_body_uses_default_message() -> None:
    with pytest.raises(ApiError) as exc_info:
        _request(lambda _r: httpx.Response(502))
    assert str(exc_info.value) == "GET /x failed with 502"
    assert exc_info.value.details is None


def test_parse_api_error_detail_ignores_non_json() -> None:
    assert parse_api_error_detail(None) is None
    assert parse_api_error_detail("plain text") is None
    assert parse_api_error_detail("[1, 2]") is None


def test_verb_helpers_send_expected_requests() -> None:
    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"method": request.method})

    async def _run():
        async with Transport(_config(_handler)) as t:
            assert t.encoding is PayloadEncoding.JSON
            return [await t.get("/a"), await t.put("/b", {"k": 1}), await t.post("/c", None)]

    got, put, posted = asyncio.run(_run())

    assert [r.body for r in (got, put, posted)] == [{"method": "GET"}, {"method": "PUT"}, {"method": "POST"}]
    assert [r.url.path for r in seen] == ["/a", "/b", "/c"]
    assert seen[0].content == b""
    assert json.loads(seen[1].content) == {"k": 1}
    assert seen[2].content == b"null"
    assert seen[2].headers["Content-Type"] == "application/json"


def test_raw_string_transport_reports_encoding() -> None:
    async def _run():
        async with Transport(_config(lambda _r: httpx.Response(200, text="ok"), PayloadEncoding.RAW_STRING)) as t:
            assert t.encoding is PayloadEncoding.RAW_STRING
            return await t.put("/raw", "key=value")

    assert asyncio.run(_run()).body == "ok"
