"""Pytest hooks and fixtures."""

import os
import sys
from dataclasses import dataclass, field
from typing import Any

import pytest
from loguru import logger

from otpbridge.credentials.clock import FixedClock
from otpbridge.host.dispatcher import Dispatcher


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "requires_device: needs a physical YubiKey (skipped in CI)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip requires_device tests unless a YubiKey was explicitly promised."""
    if os.environ.get("OTPBRIDGE_TEST_DEVICE") == "1":
        return
    skip = pytest.mark.skip(reason="Requires a YubiKey (set OTPBRIDGE_TEST_DEVICE=1)")
    for item in items:
        if "requires_device" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch):
    """Keep config and log files out of the real home directory."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in list(os.environ):
        if key.startswith("OTPBRIDGE_") and key != "OTPBRIDGE_TEST_DEVICE":
            monkeypatch.delenv(key)
    monkeypatch.setenv("OTPBRIDGE_LOGGING__FILE_ENABLED", "false")
    yield
    # Commands under test may have pointed loguru at a captured, now closed stream.
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


class FakeDevice:
    def __init__(self, accounts: list[str], close_error: Exception | None = None):
        self.accounts = accounts
        self.close_error = close_error
        self.closed = False

    def close(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error

    def __enter__(self) -> "FakeDevice":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


@dataclass
class FakeStore:
    accounts: list[str] = field(default_factory=list)
    error: Exception | None = None
    close_error: Exception | None = None
    opened: list[FakeDevice] = field(default_factory=list)

    def initialize(self) -> FakeDevice:
        if self.error is not None:
            raise self.error
        device = FakeDevice(self.accounts, close_error=self.close_error)
        self.opened.append(device)
        return device


@dataclass
class FakeEngine:
    code: int = 0
    error: Exception | None = None
    calls: list[tuple[str, Any]] = field(default_factory=list)

    def list_credentials(self, device: FakeDevice) -> list[str]:
        self.calls.append(("list", None))
        if self.error is not None:
            raise self.error
        return list(device.accounts)

    def calculate_fuzzy(self, device: FakeDevice, search_term: str, timestamp: int) -> int:
        self.calls.append(("calculate", (search_term, timestamp)))
        if self.error is not None:
            raise self.error
        return self.code


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore(accounts=["a@x.com", "b@y.com"])


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine(code=6)


@pytest.fixture
def dispatcher(fake_store, fake_engine) -> Dispatcher:
    return Dispatcher(store=fake_store, engine=fake_engine, clock=FixedClock(1_700_000_000))
