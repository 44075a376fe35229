"""Serialization helpers for request and response frames."""

from __future__ import annotations

import json

from pydantic import TypeAdapter, ValidationError

from .framing import ByteOrder, encode_frame
from .messages import Request, Response
from otpbridge.utils.exceptions import ReadError, WriteError

_REQUEST_ADAPTER: TypeAdapter[Request] = TypeAdapter(Request)


def decode_request(raw: bytes) -> Request:
    """Decode one UTF-8 JSON request; every failure is a ReadError."""
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ReadError("request is not valid UTF-8") from exc
    try:
        return _REQUEST_ADAPTER.validate_json(text)
    except ValidationError as exc:
        raise ReadError(f"malformed request ({exc.error_count()} error(s))") from exc


def encode_response(response: Response) -> bytes:
    """Encode a response into compact UTF-8 JSON shaped by its variant."""
    try:
        text = json.dumps(response.to_payload(), ensure_ascii=False, separators=(",", ":"))
        return text.encode("utf-8")
    except (TypeError, ValueError, UnicodeEncodeError) as exc:
        raise WriteError(f"response could not be encoded: {exc}") from exc


def serialize_response(response: Response, *, byte_order: ByteOrder = "native") -> bytes:
    """Encode a response and prefix it with its length."""
    return encode_frame(encode_response(response), byte_order=byte_order)
