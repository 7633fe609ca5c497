"""On-disk configuration: bridge address and the credential obtained by pairing."""

import getpass
import logging
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ValidationError

from lucia.api.hue_api import BridgeAddress, parse_address
from lucia.errors import ConfigurationError, ConfigurationMissing, DecodeError
from lucia.models.pairing import Credential

logger = logging.getLogger(__name__)

FILENAME = "lucia.json"
APP_NAME = "lucia"


def find_config_path() -> Path:
    return Path(os.getenv("LUCIA_CONFIG") or Path.home() / FILENAME)


def gen_app_name() -> str:
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = "unknown"
    return f"{APP_NAME}#{user}"


class Config(BaseModel):
    app_name: str
    user_name: Optional[str] = None
    client_key: Optional[str] = None
    bridge_ip: Optional[str] = None

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "Config":
        """
        Read the config file, falling back to an empty config when it does not
        exist. HUE_BRIDGE_IP, HUE_APP_KEY and HUE_CLIENT_KEY take precedence
        over the stored values.
        """
        path = Path(path) if path else find_config_path()
        if path.exists():
            try:
                config = cls.model_validate_json(path.read_text())
            except OSError as e:
                raise ConfigurationError(f"unable to read configuration from {path}: {e}") from e
            except ValidationError as e:
                raise DecodeError(f"unable to load configuration from {path}: {e}") from e
            logger.debug("loaded configuration from %s", path)
        else:
            config = cls(app_name=gen_app_name())

        overrides = {
            "bridge_ip": os.getenv("HUE_BRIDGE_IP"),
            "user_name": os.getenv("HUE_APP_KEY"),
            "client_key": os.getenv("HUE_CLIENT_KEY"),
        }
        return config.model_copy(update={k: v for k, v in overrides.items() if v})

    def persist(self, path: Optional[Union[str, Path]] = None) -> Path:
        path = Path(path) if path else find_config_path()
        try:
            path.write_text(self.model_dump_json(indent=2))
        except OSError as e:
            raise ConfigurationError(f"unable to save configuration to {path}: {e}") from e
        logger.info("saved configuration to %s", path)
        return path

    def require_bridge_address(self) -> BridgeAddress:
        if not self.bridge_ip:
            raise ConfigurationMissing("missing bridge_ip in config, run 'lucia configure' first")
        return parse_address(self.bridge_ip)

    def require_credential(self) -> Credential:
        if not self.user_name:
            raise ConfigurationMissing("missing user_name in config, run 'lucia configure' first")
        return Credential(username=self.user_name, client_key=self.client_key)

    def with_credential(self, address: BridgeAddress, credential: Credential) -> "Config":
        return self.model_copy(update={
            "bridge_ip": str(address),
            "user_name": credential.username,
            "client_key": credential.client_key,
        })
