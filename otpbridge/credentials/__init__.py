"""Credential collaborators: contracts, matching, clocks and the YubiKey backend."""

from .clock import FixedClock, SystemClock
from .contracts import Clock, CredentialEngine, CredentialStore, OathDevice
from .matching import credential_id, select_credential

__all__ = [
    "Clock",
    "CredentialEngine",
    "CredentialStore",
    "OathDevice",
    "FixedClock",
    "SystemClock",
    "credential_id",
    "select_credential",
]
