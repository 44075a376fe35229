"""
Length-prefixed framing for the native messaging wire format.

Frame layout:
    [4 bytes - payload length, unsigned, configured byte order]
    [N bytes - payload]

The default byte order is the host's native order, which is what browsers use
for native messaging. Client and host must therefore share an architecture
unless both sides pin the order explicitly.
"""

from __future__ import annotations

import struct
from typing import BinaryIO, Literal

from otpbridge.utils.exceptions import ReadError, WriteError

ByteOrder = Literal["native", "little", "big"]

HEADER_SIZE = 4
MAX_PAYLOAD_SIZE = 0xFFFFFFFF
READ_CHUNK_SIZE = 65536

_PREFIX_FORMATS: dict[str, str] = {
    "native": "=I",
    "little": "<I",
    "big": ">I",
}


def _prefix_format(byte_order: str) -> str:
    try:
        return _PREFIX_FORMATS[byte_order]
    except KeyError:
        raise ValueError(f"unsupported byte order: {byte_order!r}") from None


def _read_exact(stream: BinaryIO, n: int) -> bytes:
    """Read exactly *n* bytes from *stream*."""
    buf = bytearray()
    while len(buf) < n:
        try:
            chunk = stream.read(min(n - len(buf), READ_CHUNK_SIZE))
        except OSError as exc:
            raise ReadError(f"stream read failed: {exc}") from exc
        if not chunk:
            raise ReadError(f"stream ended after {len(buf)} of {n} bytes")
        buf.extend(chunk)
    return bytes(buf)


def encode_frame(payload: bytes, *, byte_order: ByteOrder = "native") -> bytes:
    """Prefix *payload* with its length."""
    if len(payload) > MAX_PAYLOAD_SIZE:
        raise WriteError(f"payload too large for a 32-bit length prefix: {len(payload)}")
    return struct.pack(_prefix_format(byte_order), len(payload)) + payload


def read_frame(stream: BinaryIO, *, byte_order: ByteOrder = "native") -> bytes:
    """Read one frame and return its payload; trailing bytes stay unread."""
    header = _read_exact(stream, HEADER_SIZE)
    (length,) = struct.unpack(_prefix_format(byte_order), header)
    return _read_exact(stream, length) if length else b""


def write_frame(stream: BinaryIO, payload: bytes, *, byte_order: ByteOrder = "native") -> None:
    """Write one frame as a single write and flush it."""
    frame = encode_frame(payload, byte_order=byte_order)
    try:
        written = stream.write(frame)
        stream.flush()
    except (OSError, ValueError) as exc:
        raise WriteError(f"stream write failed: {exc}") from exc
    if written is not None and written < len(frame):
        raise WriteError(f"short write: {written} of {len(frame)} bytes")
