from __future__ import annotations

import base64
import json
import logging
from typing import Any

from .config_types import Credentials, Options, TransportConfig
from .errors import DecodeError, PreconditionError
from .logging_ import TRACE, get_logger
from .models import (
    TOKEN_PATH,
    AccessTokenResponse,
    ClocoApp,
    ConfigObjectWrapper,
    GrantType,
    TokenRequest,
)
from .payload import Payload, PayloadEncoding, RawStringPayload, as_payload
from .transport import NO_BODY, Transport

log = get_logger(__name__)


def application_path(options: Options) -> str:
    return f"/{options.subscription}/applications/{options.application}"


def config_object_path(options: Options, object_id: str) -> str:
    return f"/{options.subscription}/configuration/{options.application}/{object_id}/{options.environment}"


def basic_auth_header(key: str, secret: str) -> str:
    encoded = base64.b64encode(f"{key}:{secret}".encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"


def bearer_auth_header(access_token: str) -> str:
    # an empty token still yields a well-formed header value
    return f"Bearer {access_token}" if access_token else "Bearer"


class ClocoClient:
    """Authenticated client for the cloco configuration API.

    Every operation takes the session ``Options`` explicitly and opens its own
    HTTP client for the duration of the call, so one instance can be shared by
    concurrent tasks. ``Options`` is only read; new tokens are returned to the
    caller, who decides whether to keep them.

    Args:
        logger: Diagnostics sink. Defaults to the package logger, which is
            silent unless the application configures logging.
        http_transport: Optional ``httpx.AsyncBaseTransport`` handed to every
            per-call client.
        timeout_s: Timeout for a single HTTP exchange.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        http_transport: Any | None = None,
        timeout_s: float = 15.0,
    ):
        self._log = logger or log
        self._http_transport = http_transport
        self._timeout_s = timeout_s

    def _transport_config(
        self,
        options: Options,
        *,
        encoding: PayloadEncoding = PayloadEncoding.JSON,
        basic_auth: bool = False,
    ) -> TransportConfig:
        if basic_auth:
            creds = _require_credentials(options)
            self._log.log(TRACE, "building auth header from client credentials")
            authorization = basic_auth_header(creds.key, creds.secret)
        else:
            self._log.log(TRACE, "building auth header from bearer token")
            authorization = bearer_auth_header(options.access_token)
        return TransportConfig(
            base_url=options.url,
            headers={"Authorization": authorization},
            encoding=encoding,
            timeout_s=self._timeout_s,
            http_transport=self._http_transport,
        )

    async def get_application(self, options: Options) -> ClocoApp:
        self._log.log(TRACE, "get_application: start")
        _require_access_token(options)
        path = application_path(options)
        return await self._call(
            "get_application",
            self._transport_config(options),
            "GET",
            path,
        )

    async def get_config_object(self, options: Options, object_id: str) -> ConfigObjectWrapper:
        self._log.log(TRACE, "get_config_object: start")
        _require_access_token(options)
        _require_object_id(object_id)
        path = config_object_path(options, object_id)
        return await self._call(
            "get_config_object",
            self._transport_config(options),
            "GET",
            path,
        )

    async def put_config_object(self, options: Options, object_id: str, body: Payload | Any) -> ConfigObjectWrapper:
        """Write a configuration object.

        A string body (or a ``RawStringPayload``) is sent as plain text, and
        the text the server answers with is then parsed as JSON. Any other
        body is sent and received as JSON.

        Raises:
            DecodeError: The plain text response is not valid JSON.
        """
        self._log.log(TRACE, "put_config_object: start")
        _require_access_token(options)
        _require_object_id(object_id)
        payload = as_payload(body)
        self._log.log(TRACE, "put_config_object: using %s encoding", payload.encoding.value)
        path = config_object_path(options, object_id)
        data = await self._call(
            "put_config_object",
            self._transport_config(options, encoding=payload.encoding),
            "PUT",
            path,
            body=payload.value,
            log_payload=not isinstance(payload, RawStringPayload),
        )
        if isinstance(payload, RawStringPayload):
            data = self._decode_text(data, path)
        return data

    async def get_access_token_from_refresh_token(self, options: Options) -> AccessTokenResponse:
        """Exchange the refresh token for a new access token.

        The request carries the current access token as its Bearer header even
        when that token has expired (or is empty); the token endpoint accepts
        it, so no access token is required up front.
        """
        self._log.log(TRACE, "get_access_token_from_refresh_token: start")
        if not options.refresh_token:
            raise PreconditionError("A refresh token is required to refresh the access token.")
        body = TokenRequest(GrantType.REFRESH_TOKEN, refresh_token=options.refresh_token)
        return await self._call(
            "get_access_token_from_refresh_token",
            self._transport_config(options),
            "POST",
            TOKEN_PATH,
            body=body.to_dict(),
            log_payload=False,
        )

    async def get_access_token_from_client_credentials(self, options: Options) -> AccessTokenResponse:
        self._log.log(TRACE, "get_access_token_from_client_credentials: start")
        _require_credentials(options)
        body = TokenRequest(GrantType.CLIENT_CREDENTIALS)
        return await self._call(
            "get_access_token_from_client_credentials",
            self._transport_config(options, basic_auth=True),
            "POST",
            TOKEN_PATH,
            body=body.to_dict(),
            log_payload=False,
        )

    async def _call(
        self,
        op: str,
        cfg: TransportConfig,
        method: str,
        path: str,
        *,
        body: Any = NO_BODY,
        log_payload: bool = True,
    ) -> Any:
        self._log.log(TRACE, "%s: calling api url=%s path=%s", op, cfg.base_url, path)
        try:
            async with Transport(cfg) as t:
                if method == "GET":
                    response = await t.get(path)
                elif method == "PUT":
                    response = await t.put(path, body)
                else:
                    response = await t.post(path, body)
        except Exception as e:
            self._log.error("%s: %s %s failed: %s", op, method, path, e, exc_info=e)
            raise

        if log_payload:
            self._log.log(TRACE, "%s: response received data=%r", op, response.body)
        else:
            self._log.log(TRACE, "%s: response received", op)
        return response.body

    def _decode_text(self, text: Any, path: str) -> Any:
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            self._log.error("put_config_object: response from %s is not valid JSON", path, exc_info=e)
            raise DecodeError(f"Response from PUT {path} is not valid JSON", str(text)) from e
        self._log.log(TRACE, "put_config_object: decoded response data=%r", data)
        return data


def _require_access_token(options: Options) -> None:
    if not options.access_token:
        raise PreconditionError("An access token is required; acquire one first.")


def _require_object_id(object_id: str) -> None:
    if not object_id:
        raise PreconditionError("A configuration object id is required.")


def _require_credentials(options: Options) -> Credentials:
    creds = options.credentials
    if creds is None or not creds.key or not creds.secret:
        raise PreconditionError("Client credentials (key and secret) are required.")
    return creds
