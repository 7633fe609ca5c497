from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from lucia import units


class StateChangeRequest(BaseModel):
    """
    Sparse state update in device units.

    Only fields that were set are sent to the bridge. Anything left out keeps
    its current value on the light.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    brightness: Optional[int] = Field(None, ge=0, le=255, alias="bri")
    color_mired: Optional[int] = Field(None, ge=0, le=0xFFFF, alias="ct")
    on: Optional[bool] = None

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)

    @property
    def is_empty(self) -> bool:
        return not self.to_payload()


class LightCommand(BaseModel):
    """User facing light update: percent brightness, kelvin temperature, power."""

    brightness: Optional[float] = Field(None, ge=0.0, le=100.0)
    temperature: Optional[int] = Field(None, gt=0, le=0xFFFF)
    power: Optional[bool] = None

    def to_request(self) -> StateChangeRequest:
        return StateChangeRequest(
            brightness=None if self.brightness is None else units.to_device_brightness(self.brightness),
            color_mired=None if self.temperature is None else units.to_mired(self.temperature),
            on=self.power,
        )
