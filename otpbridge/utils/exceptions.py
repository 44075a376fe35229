"""
Exception hierarchy for otpbridge.

Provides:
- Protocol faults that abort an invocation (ReadError, WriteError)
- Device and engine faults that become an error response
- Error classification for logging unexpected collaborator failures
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    PROTOCOL = "protocol"
    DEVICE = "device"
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"
    LOCKED = "locked"
    FATAL = "fatal"


class OtpBridgeError(Exception):
    """Base exception for all otpbridge errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"


class ProtocolError(OtpBridgeError):
    """Framing or transcoding fault; no response frame can be produced."""


class ReadError(ProtocolError):
    """Inbound frame could not be read or decoded into a request."""

    def __init__(self, message: str = "failed to read request"):
        super().__init__(message, code="READ_ERROR", category=ErrorCategory.PROTOCOL)


class WriteError(ProtocolError):
    """Outbound frame could not be encoded or written."""

    def __init__(self, message: str = "failed to write response"):
        super().__init__(message, code="WRITE_ERROR", category=ErrorCategory.PROTOCOL)


class DeviceError(OtpBridgeError):
    """Credential device could not be discovered, opened or unlocked."""

    def __init__(
        self,
        message: str,
        code: str = "DEVICE_ERROR",
        category: ErrorCategory = ErrorCategory.DEVICE,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, category=category, details=details)


class EngineError(OtpBridgeError):
    """Credential engine failed to list credentials or compute a code."""

    def __init__(
        self,
        message: str,
        code: str = "ENGINE_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, category=category, details=details)


class CredentialNotFoundError(EngineError):
    """No credential matched the search term."""

    def __init__(self, search_term: str):
        super().__init__(
            f"no credential matches {search_term!r}",
            code="CREDENTIAL_NOT_FOUND",
            category=ErrorCategory.NOT_FOUND,
            details={"search_term": search_term},
        )


class AmbiguousCredentialError(EngineError):
    """Several credentials matched the search term and none exactly."""

    def __init__(self, search_term: str, candidates: list[str]):
        super().__init__(
            f"{len(candidates)} credentials match {search_term!r}: {', '.join(candidates)}",
            code="AMBIGUOUS_CREDENTIAL",
            category=ErrorCategory.AMBIGUOUS,
            details={"search_term": search_term, "candidates": list(candidates)},
        )


def classify_exception(exc: BaseException) -> tuple[str, ErrorCategory]:
    """
    Classify an exception for logging.

    Returns:
        Tuple of (error_code, category)
    """
    if isinstance(exc, OtpBridgeError):
        return exc.code, exc.category

    if isinstance(exc, (EOFError, BrokenPipeError)):
        return "STREAM_CLOSED", ErrorCategory.PROTOCOL

    if isinstance(exc, ConnectionError):
        return "CONNECTION_ERROR", ErrorCategory.DEVICE

    if isinstance(exc, PermissionError):
        return "PERMISSION_DENIED", ErrorCategory.DEVICE

    if isinstance(exc, TimeoutError):
        return "TIMEOUT", ErrorCategory.DEVICE

    if isinstance(exc, (ValueError, TypeError, KeyError)):
        return "INVALID_VALUE", ErrorCategory.FATAL

    exc_str = str(exc).lower()
    if "not found" in exc_str or "no device" in exc_str:
        return "NOT_FOUND", ErrorCategory.NOT_FOUND

    if "locked" in exc_str or "password" in exc_str:
        return "LOCKED", ErrorCategory.LOCKED

    return "INTERNAL_ERROR", ErrorCategory.FATAL
