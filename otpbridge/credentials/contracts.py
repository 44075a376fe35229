"""Runtime contracts for the credential collaborators used by the dispatcher."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class OathDevice(Protocol):
    """Opened handle to a credential device; released when the context exits."""

    def close(self) -> None: ...
    def __enter__(self) -> Any: ...
    def __exit__(self, *exc_info: Any) -> None: ...


@runtime_checkable
class CredentialStore(Protocol):
    def initialize(self) -> OathDevice: ...


@runtime_checkable
class CredentialEngine(Protocol):
    def list_credentials(self, device: Any) -> list[str]: ...
    def calculate_fuzzy(self, device: Any, search_term: str, timestamp: int) -> int: ...


@runtime_checkable
class Clock(Protocol):
    def now(self) -> int: ...
