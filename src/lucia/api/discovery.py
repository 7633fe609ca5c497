"""Find the bridge on the local network via mDNS."""

import ipaddress
import logging
import threading
import time
from typing import Optional

from zeroconf import Error as ZeroconfError, ServiceBrowser, ServiceStateChange, Zeroconf

from lucia.api.hue_api import BridgeAddress
from lucia.errors import DiscoveryError

logger = logging.getLogger(__name__)

SERVICE_TYPE = "_hue._tcp.local."


def _first_address(addresses: list[str]) -> Optional[BridgeAddress]:
    for address in addresses:
        try:
            return ipaddress.ip_address(address.split("%")[0])  # strip IPv6 scope id
        except ValueError:
            continue
    return None


def discover(timeout: float = 5.0) -> Optional[BridgeAddress]:
    """
    Browse for ``_hue._tcp.local.`` and return the address of the first bridge
    that answers with an A or AAAA record.

    Returns None when nothing qualifying answered within ``timeout`` seconds.
    Only one bridge is ever reported, the first one to answer.

    Raises:
        DiscoveryError: the mDNS query could not be started.
    """
    if timeout <= 0:
        raise ValueError(f"timeout must be positive, got {timeout}")

    deadline = time.monotonic() + timeout
    found = threading.Event()
    result: list[BridgeAddress] = []

    def on_service_state_change(zeroconf: Zeroconf, service_type: str, name: str,
                                state_change: ServiceStateChange):
        if state_change is not ServiceStateChange.Added or found.is_set():
            return
        # resolving must not outlive the overall discovery window
        remaining_ms = int((deadline - time.monotonic()) * 1000)
        if remaining_ms <= 0:
            return
        info = zeroconf.get_service_info(service_type, name, timeout=remaining_ms)
        if info is None:
            return
        address = _first_address(info.parsed_addresses())
        if address is None:
            logger.debug("ignoring %s: no usable address record", name)
            return
        logger.info("found bridge %s at %s", name, address)
        result.append(address)
        found.set()

    try:
        zc = Zeroconf()
    except OSError as e:
        raise DiscoveryError(f"unable to start mDNS query: {e}") from e

    try:
        try:
            browser = ServiceBrowser(zc, SERVICE_TYPE, handlers=[on_service_state_change])
        except (ZeroconfError, OSError) as e:
            raise DiscoveryError(f"unable to browse for {SERVICE_TYPE}: {e}") from e
        found.wait(max(0.0, deadline - time.monotonic()))
        browser.cancel()
    finally:
        zc.close()

    return result[0] if result else None
