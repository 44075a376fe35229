"""Wire protocol: framing, message models and JSON transcoding."""

from .framing import ByteOrder, HEADER_SIZE, MAX_PAYLOAD_SIZE, encode_frame, read_frame, write_frame
from .messages import (
    AccountListRequest,
    AccountListResponse,
    CodeRequest,
    CodeResponse,
    ErrorResponse,
    Request,
    Response,
    format_code,
)
from .serialization import decode_request, encode_response, serialize_response

__all__ = [
    "ByteOrder",
    "HEADER_SIZE",
    "MAX_PAYLOAD_SIZE",
    "encode_frame",
    "read_frame",
    "write_frame",
    "AccountListRequest",
    "AccountListResponse",
    "CodeRequest",
    "CodeResponse",
    "ErrorResponse",
    "Request",
    "Response",
    "format_code",
    "decode_request",
    "encode_response",
    "serialize_response",
]
