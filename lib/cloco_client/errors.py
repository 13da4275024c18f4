from __future__ import annotations


class ClocoClientError(Exception):
    """Base client error."""


class TransportError(ClocoClientError):
    """Failure reported by the HTTP transport."""


class NetworkError(TransportError):
    """Transport/network layer error."""


class InvalidResponseError(TransportError):
    """Response body could not be decoded as JSON."""


class ApiError(TransportError):
    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class AuthError(ApiError):
    """Auth-related API error."""


class DecodeError(ClocoClientError):
    """A raw string response was not valid JSON."""

    def __init__(self, message: str, text: str):
        super().__init__(message)
        self.text = text


class PreconditionError(ClocoClientError, ValueError):
    """Options are missing a token, credential or identifier the call needs."""
