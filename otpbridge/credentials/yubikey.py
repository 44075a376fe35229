"""YubiKey OATH collaborators backed by yubikey-manager."""

from __future__ import annotations

from typing import Any

from loguru import logger
from ykman.device import list_all_devices
from yubikit.core import CommandError
from yubikit.core.smartcard import SmartCardConnection
from yubikit.oath import Credential, OathSession

from otpbridge.credentials.matching import credential_id, select_credential
from otpbridge.utils.exceptions import DeviceError, EngineError, ErrorCategory


def _display_id(credential: Credential) -> str:
    return credential_id(credential.issuer, credential.name)


class YubiKeyDevice:
    """Open smart-card connection plus OATH session; closed on context exit."""

    def __init__(self, connection: Any, session: OathSession, serial: int | None = None):
        self.connection = connection
        self.session = session
        self.serial = serial

    def close(self) -> None:
        try:
            self.connection.close()
        except OSError as exc:
            logger.debug("Ignoring YubiKey close failure: {}", exc)

    def __enter__(self) -> YubiKeyDevice:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class YubiKeyStore:
    """Discovers one YubiKey and opens its OATH application."""

    def __init__(self, serial: int | None = None, password: str = ""):
        self.serial = serial
        self.password = password

    def _pick_device(self) -> tuple[Any, Any]:
        try:
            devices = list_all_devices([SmartCardConnection])
        except (OSError, ValueError) as exc:
            raise DeviceError(f"device enumeration failed: {exc}") from exc
        if self.serial is not None:
            devices = [(dev, info) for dev, info in devices if info.serial == self.serial]
        if not devices:
            target = f" with serial {self.serial}" if self.serial is not None else ""
            raise DeviceError(f"no YubiKey detected{target}", code="DEVICE_NOT_FOUND", category=ErrorCategory.NOT_FOUND)
        if len(devices) > 1:
            serials = [info.serial for _, info in devices]
            raise DeviceError(
                f"{len(devices)} YubiKeys detected; configure device.serial",
                code="DEVICE_AMBIGUOUS",
                category=ErrorCategory.AMBIGUOUS,
                details={"serials": serials},
            )
        return devices[0]

    def _unlock(self, session: OathSession) -> None:
        if not session.locked:
            return
        if not self.password:
            raise DeviceError("OATH application is password protected", code="DEVICE_LOCKED", category=ErrorCategory.LOCKED)
        try:
            session.validate(session.derive_key(self.password))
        except CommandError as exc:
            raise DeviceError("OATH password rejected", code="DEVICE_LOCKED", category=ErrorCategory.LOCKED) from exc

    def initialize(self) -> YubiKeyDevice:
        device, info = self._pick_device()
        try:
            connection = device.open_connection(SmartCardConnection)
        except (OSError, CommandError, ValueError) as exc:
            raise DeviceError(f"failed to open smart card connection: {exc}") from exc
        try:
            session = OathSession(connection)
            self._unlock(session)
        except DeviceError:
            connection.close()
            raise
        except (OSError, CommandError, ValueError) as exc:
            connection.close()
            raise DeviceError(f"failed to select OATH application: {exc}") from exc
        logger.debug("Opened YubiKey serial={} oath_version={}", info.serial, session.version)
        return YubiKeyDevice(connection, session, serial=info.serial)


class YubiKeyEngine:
    """Lists OATH credentials and calculates codes on an opened YubiKey."""

    def __init__(self, case_sensitive: bool = False):
        self.case_sensitive = case_sensitive

    def _credentials(self, device: YubiKeyDevice) -> list[Credential]:
        try:
            return list(device.session.list_credentials())
        except (OSError, CommandError) as exc:
            raise EngineError(f"failed to list credentials: {exc}") from exc

    def list_credentials(self, device: YubiKeyDevice) -> list[str]:
        return [_display_id(c) for c in self._credentials(device)]

    def calculate_fuzzy(self, device: YubiKeyDevice, search_term: str, timestamp: int) -> int:
        credential = select_credential(
            self._credentials(device),
            search_term,
            key=_display_id,
            case_sensitive=self.case_sensitive,
        )
        if credential.touch_required:
            logger.info("Credential {} requires touch", _display_id(credential))
        try:
            code = device.session.calculate_code(credential, timestamp)
        except (OSError, CommandError) as exc:
            raise EngineError(f"failed to calculate code: {exc}") from exc
        try:
            return int(code.value)
        except ValueError as exc:
            raise EngineError(f"code is not numeric for {_display_id(credential)}") from exc
