import json
from unittest.mock import MagicMock

import pytest
import requests

from lucia.api.http_client import HttpClient
from lucia.api.hue_api import HueApi
from lucia.models.pairing import Credential


def make_response(body=None, status=200, text=None, url="http://192.168.1.2/api"):
    """Build a real ``requests.Response`` carrying ``body`` as JSON (or raw ``text``)."""
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.encoding = "utf-8"
    response._content = (text if text is not None else json.dumps(body)).encode("utf-8")
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return HueApi(HttpClient("http://192.168.1.2/api", session=session))


@pytest.fixture
def credential():
    return Credential(username="abc", client_key="xyz")


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from the real ~/lucia.json and any HUE_* variables."""
    monkeypatch.setenv("LUCIA_CONFIG", str(tmp_path / "lucia.json"))
    for name in ("HUE_BRIDGE_IP", "HUE_APP_KEY", "HUE_CLIENT_KEY"):
        monkeypatch.delenv(name, raising=False)
