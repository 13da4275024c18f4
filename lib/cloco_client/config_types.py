from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .payload import PayloadEncoding


@dataclass(frozen=True)
class Credentials:
    key: str = ""
    secret: str = ""


@dataclass
class Tokens:
    access_token: str = ""
    refresh_token: str = ""


@dataclass(frozen=True)
class Options:
    url: str
    subscription: str = ""
    application: str = ""
    environment: str = ""
    credentials: Credentials | None = None
    tokens: Tokens | None = None

    @property
    def access_token(self) -> str:
        return self.tokens.access_token if self.tokens else ""

    @property
    def refresh_token(self) -> str:
        return self.tokens.refresh_token if self.tokens else ""


@dataclass(frozen=True)
class TransportConfig:
    base_url: str
    headers: dict[str, str]
    encoding: PayloadEncoding = PayloadEncoding.JSON
    timeout_s: float = 15.0
    http_transport: Any | None = None
