"""Request dispatch against the credential collaborators.

Each collaborator call yields a CallResult tagged with the stage it ran in.
Failed results are normalized by failure_response() into the single Error
response shape, so the parent always gets exactly one frame per request.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from loguru import logger

from otpbridge.credentials.contracts import Clock, CredentialEngine, CredentialStore
from otpbridge.protocol.messages import (
    AccountListRequest,
    AccountListResponse,
    CodeRequest,
    CodeResponse,
    ErrorResponse,
    Request,
    Response,
)
from otpbridge.utils.exceptions import DeviceError, EngineError, classify_exception

T = TypeVar("T")


class Stage(str, Enum):
    """Collaborator step a failure came from."""
    DEVICE = "Device"
    ENGINE = "Engine"
    CLOCK = "Clock"


@dataclass(slots=True)
class CallFailure:
    stage: Stage
    cause: BaseException

    def __repr__(self) -> str:
        return f"{self.stage.value}({self.cause!r})"


@dataclass(slots=True)
class CallResult(Generic[T]):
    """Outcome of one collaborator call."""

    ok: bool
    value: T | None = None
    failure: CallFailure | None = None


def call_collaborator(
    stage: Stage,
    expected: type[Exception],
    fn: Callable[..., T],
    *args: Any,
) -> CallResult[T]:
    """Run *fn* and capture its failure instead of raising it."""
    try:
        return CallResult(ok=True, value=fn(*args))
    except expected as exc:
        logger.warning("{} step failed: {!r}", stage.value, exc)
        return CallResult(ok=False, failure=CallFailure(stage, exc))
    except Exception as exc:
        code, category = classify_exception(exc)
        logger.exception("{} step failed unexpectedly [{}/{}]: {!r}", stage.value, code, category.value, exc)
        return CallResult(ok=False, failure=CallFailure(stage, exc))


def failure_response(result: CallResult[Any]) -> ErrorResponse:
    """Render a failed call as the Error response."""
    if result.failure is None:
        raise ValueError("failure_response() needs a failed CallResult")
    return ErrorResponse(error=repr(result.failure))


class Dispatcher:
    """Maps one request to one response. Holds no per-request state."""

    def __init__(self, store: CredentialStore, engine: CredentialEngine, clock: Clock):
        self.store = store
        self.engine = engine
        self.clock = clock

    def handle_request(self, request: Request) -> Response:
        if isinstance(request, CodeRequest):
            logger.debug("Handling Code request")
            return self.read_code(request.account)
        if isinstance(request, AccountListRequest):
            logger.debug("Handling AccountList request")
            return self.read_account_list()
        raise TypeError(f"unsupported request: {type(request).__name__}")

    def on_device(self, fn: Callable[..., T], *args: Any) -> CallResult[T]:
        """Open a device, run the engine step *fn* on it, release it.

        Every step goes through call_collaborator, so a failure while opening,
        using or releasing the handle comes back as a failed result. An engine
        failure outranks a release failure.
        """
        opened = call_collaborator(Stage.DEVICE, DeviceError, self.store.initialize)
        if not opened.ok:
            return opened
        device = opened.value
        used = call_collaborator(Stage.ENGINE, EngineError, fn, device, *args)
        released = call_collaborator(Stage.DEVICE, DeviceError, device.close)
        if not used.ok or released.ok:
            return used
        return released

    def read_account_list(self) -> Response:
        listed = self.on_device(self.engine.list_credentials)
        if not listed.ok:
            return failure_response(listed)
        return AccountListResponse(accounts=list(listed.value))

    def read_code(self, search_term: str) -> Response:
        now = call_collaborator(Stage.CLOCK, OSError, self.clock.now)
        if not now.ok:
            return failure_response(now)
        computed = self.on_device(self.engine.calculate_fuzzy, search_term, now.value)
        if not computed.ok:
            return failure_response(computed)
        return CodeResponse.from_value(search_term, computed.value)
