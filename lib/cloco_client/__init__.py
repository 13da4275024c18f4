import logging

from .client import ClocoClient
from .config_types import Credentials, Options, Tokens
from .errors import (
    ApiError,
    AuthError,
    ClocoClientError,
    DecodeError,
    InvalidResponseError,
    NetworkError,
    PreconditionError,
    TransportError,
)
from .models import AccessTokenResponse, ClocoApp, ConfigObjectWrapper, tokens_from_response
from .payload import JsonPayload, RawStringPayload

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ClocoClient",
    "Options",
    "Credentials",
    "Tokens",
    "JsonPayload",
    "RawStringPayload",
    "AccessTokenResponse",
    "ClocoApp",
    "ConfigObjectWrapper",
    "tokens_from_response",
    "ClocoClientError",
    "TransportError",
    "NetworkError",
    "InvalidResponseError",
    "ApiError",
    "AuthError",
    "DecodeError",
    "PreconditionError",
]
