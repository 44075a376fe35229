import pytest

from otpbridge.host.dispatcher import CallResult, Dispatcher, Stage, call_collaborator, failure_response
from otpbridge.protocol.messages import (
    AccountListRequest,
    AccountListResponse,
    CodeRequest,
    CodeResponse,
    ErrorResponse,
)
from otpbridge.utils.exceptions import CredentialNotFoundError, DeviceError, EngineError


def test_account_list_returns_store_order(dispatcher, fake_store):
    response = dispatcher.handle_request(AccountListRequest(type="AccountList"))
    assert response == AccountListResponse(accounts=["a@x.com", "b@y.com"])
    assert fake_store.opened and fake_store.opened[0].closed


def test_code_renders_six_digits_and_echoes_term(dispatcher, fake_engine):
    response = dispatcher.handle_request(CodeRequest(type="Code", account="rust-lang.org"))
    assert response == CodeResponse(account="rust-lang.org", code="000006")
    assert fake_engine.calls == [("calculate", ("rust-lang.org", 1_700_000_000))]


@pytest.mark.parametrize(
    "request_",
    [AccountListRequest(type="AccountList"), CodeRequest(type="Code", account="x")],
)
def test_store_failure_becomes_error_only(dispatcher, fake_store, fake_engine, request_):
    fake_store.error = DeviceError("no YubiKey detected", code="DEVICE_NOT_FOUND")
    response = dispatcher.handle_request(request_)
    assert isinstance(response, ErrorResponse)
    assert response.to_payload() == {"error": response.error}
    assert response.error.startswith("Device(DeviceError(")
    assert "DEVICE_NOT_FOUND" in response.error
    assert fake_engine.calls == []


def test_engine_failure_releases_device(dispatcher, fake_store, fake_engine):
    fake_engine.error = CredentialNotFoundError("nothing")
    response = dispatcher.handle_request(CodeRequest(type="Code", account="nothing"))
    assert isinstance(response, ErrorResponse)
    assert response.error.startswith("Engine(CredentialNotFoundError(")
    assert fake_store.opened[0].closed


def test_unexpected_collaborator_exception_still_answers(dispatcher, fake_engine):
    fake_engine.error = RuntimeError("card removed")
    response = dispatcher.handle_request(AccountListRequest(type="AccountList"))
    assert response == ErrorResponse(error="Engine(RuntimeError('card removed'))")


def test_each_request_opens_its_own_device(dispatcher, fake_store):
    dispatcher.handle_request(AccountListRequest(type="AccountList"))
    dispatcher.handle_request(CodeRequest(type="Code", account="a"))
    assert len(fake_store.opened) == 2
    assert all(d.closed for d in fake_store.opened)


def test_call_collaborator_keeps_failure_provenance():
    err = EngineError("boom")

    def _fail():
        raise err

    result = call_collaborator(Stage.ENGINE, EngineError, _fail)
    assert result.ok is False
    assert result.failure.stage is Stage.ENGINE
    assert result.failure.cause is err
    assert failure_response(result) == ErrorResponse(error="Engine(EngineError('ENGINE_ERROR', 'boom'))")


def test_call_collaborator_success():
    result = call_collaborator(Stage.DEVICE, DeviceError, lambda x: x * 2, 21)
    assert result == CallResult(ok=True, value=42)


def test_failure_response_requires_failure():
    with pytest.raises(ValueError):
        failure_response(CallResult(ok=True, value=1))


def test_unknown_request_type_is_rejected(dispatcher):
    with pytest.raises(TypeError):
        dispatcher.handle_request(object())


@pytest.mark.parametrize(
    "request_",
    [AccountListRequest(type="AccountList"), CodeRequest(type="Code", account="a")],
)
def test_release_failure_still_answers(dispatcher, fake_store, request_):
    fake_store.close_error = RuntimeError("card removed during release")
    response = dispatcher.handle_request(request_)
    assert response == ErrorResponse(error="Device(RuntimeError('card removed during release'))")
    assert fake_store.opened[0].closed


def test_engine_failure_outranks_release_failure(dispatcher, fake_store, fake_engine):
    fake_store.close_error = DeviceError("release failed")
    fake_engine.error = CredentialNotFoundError("nothing")
    response = dispatcher.handle_request(CodeRequest(type="Code", account="nothing"))
    assert response.error.startswith("Engine(CredentialNotFoundError(")


class _BrokenClock:
    def now(self) -> int:
        raise OSError("clock unavailable")


def test_clock_failure_becomes_error(fake_store, fake_engine):
    dispatcher = Dispatcher(store=fake_store, engine=fake_engine, clock=_BrokenClock())
    response = dispatcher.handle_request(CodeRequest(type="Code", account="a"))
    assert response == ErrorResponse(error="Clock(OSError('clock unavailable'))")
    assert fake_store.opened == []
    assert fake_engine.calls == []
