from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, TypedDict

from .config_types import Tokens

TOKEN_PATH = "/oauth/token"


class GrantType(str, Enum):
    REFRESH_TOKEN = "refresh_token"
    CLIENT_CREDENTIALS = "client_credentials"


@dataclass(frozen=True)
class TokenRequest:
    grant_type: GrantType
    refresh_token: str | None = None

    def to_dict(self) -> dict[str, str]:
        body = {"grant_type": self.grant_type.value}
        if self.refresh_token is not None:
            body["refresh_token"] = self.refresh_token
        return body


class AccessTokenResponse(TypedDict, total=False):
    access_token: str
    token_type: str
    expires_in: int
    refresh_token: str


class ConfigObjectWrapper(TypedDict, total=False):
    id: str
    value: Any


class ClocoApp(TypedDict, total=False):
    id: str
    name: str
    description: str


def tokens_from_response(response: AccessTokenResponse, previous: Tokens | None = None) -> Tokens:
    """Build the token pair a caller should keep after a grant.

    The server does not always rotate the refresh token, so the previous one
    is kept when the response carries none.
    """
    refresh_token = response.get("refresh_token") or (previous.refresh_token if previous else "")
    return Tokens(
        access_token=str(response.get("access_token") or ""),
        refresh_token=str(refresh_token or ""),
    )
