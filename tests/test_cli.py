"""End-to-end tests for the command line, with the bridge mocked out."""

import ipaddress
from unittest.mock import MagicMock, patch

import pytest

from lucia import cli
from lucia.api.hue_api import HueApi
from lucia.config import Config
from lucia.errors import TransportError
from lucia.models.group import Group
from lucia.models.light import Light
from lucia.models.pairing import Credential, PairingOutcome


@pytest.fixture(autouse=True)
def no_dotenv(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_api():
    api = MagicMock(spec=HueApi)
    with patch.object(cli.HueApi, "for_address", return_value=api) as for_address:
        api.for_address = for_address
        yield api


@pytest.fixture
def configured():
    Config(app_name="lucia#tester", bridge_ip="192.168.1.2", user_name="abc").persist()


class TestDiscover:

    def test_found(self, capsys):
        with patch.object(cli.discovery, "discover", return_value=ipaddress.ip_address("192.168.1.2")) as discover:
            assert cli.main(["discover", "-t", "2"]) == 0
        discover.assert_called_once_with(2)
        assert capsys.readouterr().out == "found bridge at 192.168.1.2\n"

    def test_nothing_found(self, capsys):
        with patch.object(cli.discovery, "discover", return_value=None):
            assert cli.main(["discover"]) == 0
        assert "no bridge found" in capsys.readouterr().out


class TestConfigure:

    def test_pairs_and_persists(self, fake_api, capsys):
        fake_api.pair.return_value = PairingOutcome.success(Credential(username="abc", client_key="xyz"))

        assert cli.main(["configure", "-a", "192.168.1.2"]) == 0

        config = Config.load()
        assert (config.bridge_ip, config.user_name, config.client_key) == ("192.168.1.2", "abc", "xyz")
        fake_api.pair.assert_called_once_with(config.app_name)
        fake_api.close.assert_called_once()
        assert "waiting for the link button" in capsys.readouterr().out

    def test_bad_address(self, fake_api):
        assert cli.main(["configure", "-a", "not-an-ip"]) == 1
        fake_api.pair.assert_not_called()

    def test_transport_failure_exits_non_zero(self, fake_api):
        fake_api.pair.return_value = PairingOutcome.failed(TransportError("refused"))
        assert cli.main(["configure", "-a", "192.168.1.2"]) == 1
        assert Config.load().user_name is None


class TestListing:

    def test_devices(self, fake_api, configured, capsys):
        fake_api.list_lights.return_value = {
            "1": Light(id="1", name="Desk", type="Dimmable light", state={"on": True, "bri": 254, "reachable": True}),
        }
        assert cli.main(["devices"]) == 0
        assert capsys.readouterr().out == "1: Desk (type=Dimmable light, on=True, bri=254)\n"
        fake_api.for_address.assert_called_once_with(ipaddress.ip_address("192.168.1.2"))
        fake_api.list_lights.assert_called_once_with(Credential(username="abc"))

    def test_groups_with_lights(self, fake_api, configured, capsys):
        fake_api.list_groups.return_value = {
            "1": Group(id="1", name="Office", type="Room", lights=["1"], action={"on": False, "bri": 10}),
        }
        fake_api.list_lights.return_value = {
            "1": Light(id="1", name="Desk", type="Dimmable light", state={"on": False, "bri": 10, "reachable": True}),
        }
        assert cli.main(["groups", "--lights"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["1: Office (type=Room, on=False, bri=10, lights=['1'])", "    1: Desk"]

    def test_not_configured(self, fake_api):
        assert cli.main(["devices"]) == 1
        fake_api.list_lights.assert_not_called()


class TestLight:

    def test_sends_converted_request(self, fake_api, configured):
        fake_api.set_light_state.return_value = "[]"
        fake_api.set_group_state.return_value = "[]"

        assert cli.main(["light", "-b", "50", "-t", "4000", "-p", "off", "1", "2", "-g", "0"]) == 0

        assert [c.args[1] for c in fake_api.set_light_state.call_args_list] == ["1", "2"]
        request = fake_api.set_light_state.call_args.args[2]
        assert request.to_payload() == {"bri": 128, "ct": 250, "on": False}
        fake_api.set_group_state.assert_called_once()

    def test_partial_failure_exits_non_zero(self, fake_api, configured):
        fake_api.set_light_state.side_effect = [TransportError("timeout"), "[]"]
        assert cli.main(["light", "-p", "on", "1", "2"]) == 1
        assert fake_api.set_light_state.call_count == 2

    def test_invalid_brightness(self, fake_api, configured):
        assert cli.main(["light", "-b", "150", "1"]) == 1
        fake_api.set_light_state.assert_not_called()

    def test_invalid_power_value_is_usage_error(self):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["light", "-p", "maybe", "1"])
        assert excinfo.value.code == 2


class TestConfigFileErrors:

    def test_directory_at_config_path_exits_non_zero(self, tmp_path, monkeypatch):
        config_dir = tmp_path / "as-dir"
        config_dir.mkdir()
        monkeypatch.setenv("LUCIA_CONFIG", str(config_dir))
        assert cli.main(["devices"]) == 1
