"""Local network address of the host, for status and display."""
import ipaddress
import logging
import socket
from dataclasses import dataclass
from typing import Callable, Iterable

import psutil

from . import config, debug

log = logging.getLogger(__name__)


class NoInterfaceError(LookupError):
    """No up, non-loopback interface of the requested family."""


@dataclass(frozen=True)
class NetworkInterface:
    name: str
    family: socket.AddressFamily
    address: str
    is_up: bool


def list_interfaces() -> list[NetworkInterface]:
    """Every address of every interface, ordered by interface name."""
    stats = psutil.net_if_stats()
    interfaces = []
    for name, addrs in sorted(psutil.net_if_addrs().items()):
        is_up = bool(stats[name].isup) if name in stats else False
        for addr in addrs:
            interfaces.append(NetworkInterface(name=name, family=addr.family, address=addr.address, is_up=is_up))
    return interfaces


def _is_loopback(iface: NetworkInterface) -> bool:
    if iface.name in ("lo", "lo0"):
        return True
    try:
        # strip IPv6 zone ids such as fe80::1%eth0
        return ipaddress.ip_address(iface.address.split("%", 1)[0]).is_loopback
    except ValueError:
        return False


class LocalAddressResolver:
    """Picks the first qualifying interface address in enumeration order.

    Args:
        enumerate_interfaces: returns the interfaces to consider; psutil-backed by default.
        family: address family to accept, IPv4 by default.
        preferred: interface name tried before the others (e.g. en0, wlan0).
    """

    def __init__(
        self,
        enumerate_interfaces: Callable[[], Iterable[NetworkInterface]] = list_interfaces,
        family: socket.AddressFamily = socket.AF_INET,
        preferred: str | None = None,
    ):
        self._enumerate = enumerate_interfaces
        self.family = family
        self.preferred = preferred

    def qualifies(self, iface: NetworkInterface) -> bool:
        return iface.is_up and iface.family == self.family and not _is_loopback(iface)

    def ip_address(self) -> str:
        """Address of the first qualifying interface; raises NoInterfaceError if none."""
        candidates = [iface for iface in self._enumerate() if self.qualifies(iface)]
        if not candidates:
            debug.log_network("No qualifying network interface", success=False)
            raise NoInterfaceError(f"No active non-loopback {self.family.name} interface found")

        if self.preferred:
            for iface in candidates:
                if iface.name == self.preferred:
                    chosen = iface
                    break
            else:
                log.info(f"Preferred interface {self.preferred} not available, using {candidates[0].name}")
                chosen = candidates[0]
        else:
            chosen = candidates[0]

        debug.log_network(f"{chosen.name} → {chosen.address}")
        return chosen.address


def ip_address() -> str:
    """Host IPv4 address using the configured preferred interface."""
    return LocalAddressResolver(preferred=config.PREFERRED_INTERFACE).ip_address()
