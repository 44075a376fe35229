"""Utility functions for otpbridge."""

from otpbridge.utils.exceptions import (
    OtpBridgeError,
    ProtocolError,
    ReadError,
    WriteError,
    DeviceError,
    EngineError,
    CredentialNotFoundError,
    AmbiguousCredentialError,
    ErrorCategory,
    classify_exception,
)

__all__ = [
    "OtpBridgeError",
    "ProtocolError",
    "ReadError",
    "WriteError",
    "DeviceError",
    "EngineError",
    "CredentialNotFoundError",
    "AmbiguousCredentialError",
    "ErrorCategory",
    "classify_exception",
]
