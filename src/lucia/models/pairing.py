from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lucia.errors import TransportError

LINK_BUTTON_NOT_PRESSED = 101


class ApiErrorRecord(BaseModel):
    # {"error":{"type":101,"address":"","description":"link button not pressed"}}
    type: int
    address: Optional[str] = None
    description: Optional[str] = None


class Credential(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    username: str
    client_key: Optional[str] = Field(None, alias="clientkey")


class PairingResponseItem(BaseModel):
    """The single slot of a pairing response: either ``success`` or ``error``, never both."""

    success: Optional[Credential] = None
    error: Optional[ApiErrorRecord] = None

    @model_validator(mode="before")
    @classmethod
    def _exactly_one_key(cls, data):
        if isinstance(data, dict) and ("success" in data) == ("error" in data):
            raise ValueError("expected exactly one of the keys 'success' or 'error'")
        return data

    @model_validator(mode="after")
    def _exactly_one(self):
        if (self.success is None) == (self.error is None):
            raise ValueError("expected exactly one of 'success' or 'error'")
        return self


class PairingStatus(Enum):
    SUCCESS = "success"
    LINK_NOT_PRESSED = "link_not_pressed"
    TRANSPORT_ERROR = "transport_error"


class PairingOutcome(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: PairingStatus
    credential: Optional[Credential] = None
    error: Optional[ApiErrorRecord] = None
    transport_error: Optional[TransportError] = None

    @classmethod
    def success(cls, credential: Credential) -> "PairingOutcome":
        return cls(status=PairingStatus.SUCCESS, credential=credential)

    @classmethod
    def link_not_pressed(cls, error: ApiErrorRecord) -> "PairingOutcome":
        return cls(status=PairingStatus.LINK_NOT_PRESSED, error=error)

    @classmethod
    def failed(cls, exc: TransportError) -> "PairingOutcome":
        return cls(status=PairingStatus.TRANSPORT_ERROR, transport_error=exc)
