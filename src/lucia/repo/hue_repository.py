import logging

from lucia.api.hue_api import HueApi
from lucia.models.group import Group
from lucia.models.light import Light
from lucia.models.pairing import Credential

logger = logging.getLogger(__name__)


class HueRepository:
    def __init__(self, api: HueApi, credential: Credential):
        self.api = api
        self.credential = credential

    def get_groups_with_lights(self) -> dict[str, tuple[Group, dict[str, Light]]]:
        """Every group together with its member lights, in the group's own order."""
        groups = self.api.list_groups(self.credential)
        all_lights = self.api.list_lights(self.credential)
        return {
            group_id: (group, self._resolve(group, all_lights))
            for group_id, group in groups.items()
        }

    def get_group_lights(self, group_id: str) -> dict[str, Light]:
        groups = self.api.list_groups(self.credential)
        if group_id not in groups:
            raise KeyError(f"unknown group id: {group_id}")
        return self._resolve(groups[group_id], self.api.list_lights(self.credential))

    @staticmethod
    def _resolve(group: Group, all_lights: dict[str, Light]) -> dict[str, Light]:
        group_lights = {}
        for light_id in group.lights:
            if light_id not in all_lights:
                logger.warning("group %s references unknown light %s", group.id, light_id)
                continue
            group_lights[light_id] = all_lights[light_id]
        return group_lights
