"""Request payloads for the configuration write endpoint.

The API accepts either a structured JSON document or a free-form text blob
(raw file contents, for instance). The two are sent with different encodings,
so a payload is tagged once at the call boundary and the tag decides how the
request is encoded and how the response is decoded.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class PayloadEncoding(str, Enum):
    JSON = "json"
    RAW_STRING = "raw_string"


@dataclass(frozen=True)
class JsonPayload:
    value: Any

    encoding = PayloadEncoding.JSON


@dataclass(frozen=True)
class RawStringPayload:
    value: str

    encoding = PayloadEncoding.RAW_STRING


Payload = Union[JsonPayload, RawStringPayload]


def as_payload(body: Any) -> Payload:
    """Tag a bare body: strings travel as raw text, everything else as JSON."""
    if isinstance(body, (JsonPayload, RawStringPayload)):
        return body
    if isinstance(body, str):
        return RawStringPayload(body)
    return JsonPayload(body)
