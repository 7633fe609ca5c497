from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from lucia.models.light import ActionState


class GroupState(BaseModel):
    all_on: bool
    any_on: bool


class Group(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    type: str
    lights: list[str] = []
    action: ActionState
    group_class: Optional[str] = Field(None, alias="class")
    state: Optional[GroupState] = None
