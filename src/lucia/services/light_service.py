import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from lucia.api.hue_api import HueApi
from lucia.commands.base import StateChangeRequest
from lucia.errors import LuciaError
from lucia.models.pairing import Credential

logger = logging.getLogger(__name__)


@dataclass
class TargetResult:
    kind: str  # "light" or "group"
    target_id: str
    response: Optional[str] = None
    error: Optional[LuciaError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class LightService:
    def __init__(self, api: HueApi, credential: Credential):
        self.api = api
        self.credential = credential

    def set_light(self, light_id: str, request: StateChangeRequest) -> TargetResult:
        return self._apply_one("light", light_id, self.api.set_light_state, request)

    def set_group(self, group_id: str, request: StateChangeRequest) -> TargetResult:
        return self._apply_one("group", group_id, self.api.set_group_state, request)

    def apply(self, request: StateChangeRequest, light_ids: Iterable[str] = (),
              group_ids: Iterable[str] = ()) -> list[TargetResult]:
        """
        Send ``request`` to every light, then every group, one after another.

        A failing target does not stop the batch and nothing already applied is
        undone; check ``TargetResult.ok`` on each entry.
        """
        results = [self.set_light(light_id, request) for light_id in light_ids]
        results += [self.set_group(group_id, request) for group_id in group_ids]
        return results

    def _apply_one(self, kind: str, target_id: str, setter, request: StateChangeRequest) -> TargetResult:
        try:
            response = setter(self.credential, target_id, request)
        except LuciaError as e:
            logger.error("failed to update %s %s: %s", kind, target_id, e)
            return TargetResult(kind, target_id, error=e)
        logger.info("updated %s %s: %s", kind, target_id, response)
        return TargetResult(kind, target_id, response=response)
