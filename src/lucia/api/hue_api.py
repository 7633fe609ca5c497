"""Client for the bridge's v1 JSON API (``http://<bridge>/api/...``)."""

import ipaddress
import json
import logging
from typing import Any, Optional, Union

from pydantic import ValidationError

from lucia.api.http_client import HttpClient
from lucia.commands.base import StateChangeRequest
from lucia.errors import AddressParseError, BridgeError, DecodeError, TransportError
from lucia.models.group import Group
from lucia.models.light import Light
from lucia.models.pairing import (LINK_BUTTON_NOT_PRESSED, ApiErrorRecord, Credential,
                                  PairingOutcome, PairingResponseItem)

logger = logging.getLogger(__name__)

BridgeAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def parse_address(address: Union[str, BridgeAddress]) -> BridgeAddress:
    try:
        return ipaddress.ip_address(address)
    except ValueError as e:
        raise AddressParseError(f"invalid bridge address: {address!r}") from e


def _id_sort_key(item_id: str):
    # numeric ids ("1", "2", "10") in numeric order, anything else after them
    return (0, int(item_id), "") if item_id.isdecimal() else (1, 0, item_id)


class HueApi:
    def __init__(self, http: HttpClient):
        self.http = http

    @classmethod
    def for_address(cls, address: Union[str, BridgeAddress], timeout: float = 5) -> "HueApi":
        addr = parse_address(address)
        host = f"[{addr}]" if addr.version == 6 else str(addr)
        return cls(HttpClient(f"http://{host}/api", timeout=timeout))

    def close(self):
        self.http.close()

    def pair(self, device_label: str) -> PairingOutcome:
        """
        Ask the bridge for a new user.

        Until somebody presses the link button the bridge keeps answering with
        error 101, which is reported as ``LINK_NOT_PRESSED``. Transport failures
        are returned as an outcome as well; malformed answers and any other
        bridge error raise.
        """
        payload = {"devicetype": device_label, "generateclientkey": True}
        try:
            body = self.http.post("", payload)
        except TransportError as e:
            return PairingOutcome.failed(e)

        if not isinstance(body, list) or len(body) != 1:
            raise DecodeError(f"expected a single-item array from the pairing request, got {body!r}")
        try:
            item = PairingResponseItem.model_validate(body[0])
        except ValidationError as e:
            raise DecodeError(f"unexpected pairing response: {body[0]!r}") from e

        if item.success is not None:
            return PairingOutcome.success(item.success)
        if item.error.type == LINK_BUTTON_NOT_PRESSED:
            return PairingOutcome.link_not_pressed(item.error)
        raise BridgeError(item.error.type, item.error.description, item.error.address)

    def list_lights(self, credential: Credential) -> dict[str, Light]:
        raw = self._get_resource(credential, "lights")
        return self._decode_mapping(raw, Light)

    def list_groups(self, credential: Credential) -> dict[str, Group]:
        raw = self._get_resource(credential, "groups")
        return self._decode_mapping(raw, Group)

    def set_light_state(self, credential: Credential, light_id: str, request: StateChangeRequest) -> str:
        return self._put_state(f"{credential.username}/lights/{light_id}/state", request)

    def set_group_state(self, credential: Credential, group_id: str, request: StateChangeRequest) -> str:
        return self._put_state(f"{credential.username}/groups/{group_id}/action", request)

    def _put_state(self, path: str, request: StateChangeRequest) -> str:
        body = self.http.put(path, request.to_payload())
        logger.debug("PUT %s -> %s", path, body)
        try:
            decoded = json.loads(body)
        except ValueError:
            return body
        # unknown ids and invalid values come back as HTTP 200 with error records
        if isinstance(decoded, list):
            error = self._first_error(decoded)
            if error is not None:
                raise BridgeError(error.type, error.description, error.address)
        return body

    def _get_resource(self, credential: Credential, resource: str) -> Any:
        body = self.http.get(f"{credential.username}/{resource}")
        # the bridge answers HTTP 200 with an error array, e.g. for an unknown user
        if isinstance(body, list):
            error = self._first_error(body)
            if error is not None:
                raise BridgeError(error.type, error.description, error.address)
        if not isinstance(body, dict):
            raise DecodeError(f"expected an object from /{resource}, got {type(body).__name__}")
        return body

    @staticmethod
    def _first_error(body: list) -> Optional[ApiErrorRecord]:
        for item in body:
            if isinstance(item, dict) and "error" in item:
                try:
                    return ApiErrorRecord.model_validate(item["error"])
                except ValidationError as e:
                    raise DecodeError(f"malformed error record: {item!r}") from e
        return None

    @staticmethod
    def _decode_mapping(raw: dict, model):
        decoded = {}
        for item_id in sorted(raw, key=_id_sort_key):
            record = raw[item_id]
            if not isinstance(record, dict):
                raise DecodeError(f"record {item_id!r} is not an object")
            try:
                decoded[item_id] = model.model_validate({**record, "id": item_id})
            except ValidationError as e:
                raise DecodeError(f"unexpected record for id {item_id!r}: {e}") from e
        return decoded
