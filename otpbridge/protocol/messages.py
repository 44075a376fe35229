"""Request and response models exchanged with the parent process."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr

CODE_DIGITS = 6


class AccountListRequest(BaseModel):
    """Ask for every credential name on the device."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["AccountList"]


class CodeRequest(BaseModel):
    """Ask for the current code of the credential matching ``account``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["Code"]
    account: StrictStr


Request = Annotated[Union[AccountListRequest, CodeRequest], Field(discriminator="type")]


def format_code(value: int) -> str:
    """Render an OTP value as a zero-padded 6-digit string."""
    return f"{value:0{CODE_DIGITS}d}"


@dataclass(slots=True, frozen=True)
class CodeResponse:
    account: str
    code: str

    @classmethod
    def from_value(cls, account: str, value: int) -> CodeResponse:
        return cls(account=account, code=format_code(value))

    def to_payload(self) -> dict[str, Any]:
        return {"account": self.account, "code": self.code}


@dataclass(slots=True, frozen=True)
class AccountListResponse:
    accounts: list[str]

    def to_payload(self) -> dict[str, Any]:
        return {"accounts": list(self.accounts)}


@dataclass(slots=True, frozen=True)
class ErrorResponse:
    """Failure rendering; never carries partial account or code data."""

    error: str

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.error}


Response = Union[CodeResponse, AccountListResponse, ErrorResponse]
