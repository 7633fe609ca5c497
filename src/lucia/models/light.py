from pydantic import BaseModel, Field
from typing import Optional


class ActionState(BaseModel):
    on: bool
    bri: Optional[int] = Field(None, ge=0, le=255)
    hue: Optional[int] = None
    sat: Optional[int] = None
    effect: Optional[str] = None
    xy: Optional[list[float]] = None
    ct: Optional[int] = None
    alert: Optional[str] = None
    colormode: Optional[str] = None


class LightState(ActionState):
    reachable: bool


class LightControls(BaseModel):
    mindimlevel: Optional[int] = None
    maxlumen: Optional[int] = None
    colorgamuttype: Optional[str] = None
    colorgamut: Optional[list[list[float]]] = None


class LightCapabilities(BaseModel):
    certified: bool = False
    control: LightControls = LightControls()


class LightConfig(BaseModel):
    archetype: Optional[str] = None # e.g. "sultanbulb"
    function: Optional[str] = None
    direction: Optional[str] = None


class Light(BaseModel):
    id: str
    name: str
    type: str
    state: LightState
    capabilities: LightCapabilities = LightCapabilities()
    config: LightConfig = LightConfig()
    modelid: Optional[str] = None
    manufacturername: Optional[str] = None
    productname: Optional[str] = None
    uniqueid: Optional[str] = None
    swversion: Optional[str] = None
