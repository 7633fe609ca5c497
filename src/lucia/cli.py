"""Command line entry point: ``lucia discover|configure|devices|groups|light``."""

import argparse
import logging
import sys
from typing import Optional, Sequence

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from lucia.api import discovery
from lucia.api.hue_api import HueApi, parse_address
from lucia.commands.base import LightCommand
from lucia.config import Config
from lucia.errors import LuciaError
from lucia.repo.hue_repository import HueRepository
from lucia.services.light_service import LightService
from lucia.services.pairing_service import PairingService

logger = logging.getLogger("lucia")


def _power(value: str) -> bool:
    value = value.lower()
    if value in ("on", "true", "1", "yes"):
        return True
    if value in ("off", "false", "0", "no"):
        return False
    raise argparse.ArgumentTypeError(f"expected on/off, got {value!r}")


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lucia", description="Control the lights behind a Hue bridge.")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("discover", help="print the Hue bridge found on the local network")
    p.add_argument("-t", "--timeout-secs", type=_positive_int, default=5)
    p.set_defaults(func=cmd_discover)

    p = sub.add_parser("configure", help="pair with a bridge and store the credential")
    p.add_argument("-a", "--address", required=True)
    p.add_argument("-m", "--max-poll-secs", type=_positive_int, default=300)
    p.add_argument("-p", "--poll-interval-secs", type=_positive_int, default=3)
    p.set_defaults(func=cmd_configure)

    p = sub.add_parser("devices", help="print all lights known by the configured bridge")
    p.set_defaults(func=cmd_devices)

    p = sub.add_parser("groups", help="print all groups known by the configured bridge")
    p.add_argument("--lights", action="store_true", help="also list the lights of each group")
    p.set_defaults(func=cmd_groups)

    p = sub.add_parser(
        "light",
        help="change lights and groups",
        description="Set properties of lights and groups. Properties that are not passed are left untouched.",
    )
    p.add_argument("ids", nargs="*", metavar="ID", help="ids of the lights to update")
    p.add_argument("-b", "--brightness", type=float, help="brightness percentage (0-100)")
    p.add_argument("-t", "--temperature", type=int, help="color temperature in kelvin (range is device dependent)")
    p.add_argument("-p", "--power", type=_power, help="on or off")
    p.add_argument("-g", "--group-ids", nargs="+", default=[], metavar="GROUP_ID",
                   help="ids of the groups to update")
    p.set_defaults(func=cmd_light)
    return parser


def cmd_discover(args) -> int:
    address = discovery.discover(args.timeout_secs)
    if address is None:
        print("no bridge found")
    else:
        print(f"found bridge at {address}")
    return 0


def cmd_configure(args) -> int:
    config = Config.load()
    address = parse_address(args.address)
    api = HueApi.for_address(address)
    try:
        pairing = PairingService(api, args.poll_interval_secs, args.max_poll_secs)
        print("waiting for the link button to be pushed..", end="", flush=True)
        try:
            credential = pairing.run(config.app_name, on_poll=lambda _: print(".", end="", flush=True))
        finally:
            print()
    finally:
        api.close()
    path = config.with_credential(address, credential).persist()
    print(f"paired with {address}, configuration saved to {path}")
    return 0


def _api_and_credential(config: Config):
    credential = config.require_credential()
    return HueApi.for_address(config.require_bridge_address()), credential


def cmd_devices(args) -> int:
    api, credential = _api_and_credential(Config.load())
    try:
        for light_id, light in api.list_lights(credential).items():
            print(f"{light_id}: {light.name} (type={light.type}, on={light.state.on}, bri={light.state.bri})")
    finally:
        api.close()
    return 0


def cmd_groups(args) -> int:
    api, credential = _api_and_credential(Config.load())
    try:
        if args.lights:
            entries = HueRepository(api, credential).get_groups_with_lights().values()
        else:
            entries = [(group, None) for group in api.list_groups(credential).values()]
        for group, lights in entries:
            print(f"{group.id}: {group.name} (type={group.type}, on={group.action.on}, "
                  f"bri={group.action.bri}, lights={group.lights})")
            for light_id, light in (lights or {}).items():
                print(f"    {light_id}: {light.name}")
    finally:
        api.close()
    return 0


def cmd_light(args) -> int:
    try:
        command = LightCommand(brightness=args.brightness, temperature=args.temperature, power=args.power)
    except ValidationError as e:
        logger.error("invalid light settings: %s", e)
        return 1
    request = command.to_request()
    if not args.ids and not args.group_ids:
        logger.warning("no light or group ids given, nothing to do")
        return 0

    api, credential = _api_and_credential(Config.load())
    try:
        results = LightService(api, credential).apply(request, args.ids, args.group_ids)
    finally:
        api.close()
    for result in results:
        if result.ok:
            logger.debug("%s %s: %s", result.kind, result.target_id, result.response)
    failed = [r for r in results if not r.ok]
    if failed:
        logger.error("%d of %d updates failed", len(failed), len(results))
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except LuciaError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
