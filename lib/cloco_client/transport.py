from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import httpx

from .config_types import TransportConfig
from .errors import ApiError, AuthError, InvalidResponseError, NetworkError
from .payload import PayloadEncoding

USER_AGENT = "cloco-client/0.1.0"

# distinguishes "send nothing" from a JSON null body
NO_BODY = object()


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: Any


class Transport:
    """One HTTP client for one call, bound to a base URL, headers and an encoding."""

    def __init__(self, cfg: TransportConfig):
        self._cfg = cfg
        headers = {"User-Agent": USER_AGENT, **cfg.headers}
        if cfg.encoding is PayloadEncoding.RAW_STRING:
            headers.setdefault("Content-Type", "text/plain; charset=utf-8")
            headers.setdefault("Accept", "text/plain, application/json")
        else:
            headers.setdefault("Accept", "application/json")

        self._client = httpx.AsyncClient(
            base_url=cfg.base_url.rstrip("/"),
            timeout=cfg.timeout_s,
            headers=headers,
            follow_redirects=True,
            transport=cfg.http_transport,
        )

    @property
    def encoding(self) -> PayloadEncoding:
        return self._cfg.encoding

    async def __aenter__(self) -> "Transport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def get(self, path: str) -> TransportResponse:
        return await self.request("GET", path)

    async def put(self, path: str, body: Any) -> TransportResponse:
        return await self.request("PUT", path, body=body)

    async def post(self, path: str, body: Any) -> TransportResponse:
        return await self.request("POST", path, body=body)

    async def request(self, method: str, path: str, *, body: Any = NO_BODY) -> TransportResponse:
        kwargs: dict[str, Any] = {}
        if body is not NO_BODY:
            if self._cfg.encoding is PayloadEncoding.RAW_STRING:
                kwargs["content"] = str(body).encode("utf-8")
            else:
                # httpx skips json=None, so None has to be serialised here to go out as null
                kwargs["content"] = json.dumps(body, ensure_ascii=False).encode("utf-8")
                kwargs["headers"] = {"Content-Type": "application/json"}

        try:
            r = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise NetworkError(str(e)) from e

        if r.status_code >= 400:
            raise _api_error(method, path, r)

        if self._cfg.encoding is PayloadEncoding.RAW_STRING:
            return TransportResponse(r.status_code, r.text)

        if not r.content.strip():
            return TransportResponse(r.status_code, None)
        try:
            data = r.json()
        except ValueError as e:
            raise InvalidResponseError(
                f"{method} {path} returned a body that is not valid JSON"
            ) from e
        return TransportResponse(r.status_code, data)


def _api_error(method: str, path: str, r: httpx.Response) -> ApiError:
    msg = f"{method} {path} failed with {r.status_code}"
    details = None

    data: Any = None
    try:
        data = r.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        details = json.dumps(data, ensure_ascii=False)
        for key in ("message", "detail", "error_description"):
            if data.get(key):
                msg = str(data[key])
                break
    elif r.text:
        details = r.text[:1000]

    if r.status_code in (401, 403):
        return AuthError(r.status_code, msg, details)
    return ApiError(r.status_code, msg, details)
