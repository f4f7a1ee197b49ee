"""Local interface enumeration used to seed a default scan prefix."""
from __future__ import annotations

import ipaddress
import socket
from typing import NamedTuple

import psutil

from netscope.scan.models import network_prefix

DEFAULT_NETMASK = "255.255.255.0"


class InterfaceInfo(NamedTuple):
    """An active IPv4 interface."""

    name: str
    ip: str
    netmask: str

    @property
    def network(self) -> ipaddress.IPv4Network:
        return ipaddress.IPv4Network(f"{self.ip}/{self.netmask}", strict=False)


def get_local_interfaces() -> list[InterfaceInfo]:
    """Return ``(name, ip, netmask)`` for every up, non-loopback IPv4 interface."""

    try:
        stats = psutil.net_if_stats()
        addrs = psutil.net_if_addrs()
    except (OSError, RuntimeError, psutil.Error):
        return []

    result: list[InterfaceInfo] = []
    for name, entries in addrs.items():
        stat = stats.get(name)
        if stat is None or not stat.isup:
            continue
        for addr in entries:
            if addr.family != socket.AF_INET or not addr.address:
                continue
            try:
                ip = ipaddress.IPv4Address(addr.address)
            except ValueError:
                continue
            if ip.is_loopback:
                continue
            result.append(InterfaceInfo(name, str(ip), addr.netmask or DEFAULT_NETMASK))
    return result


def default_scan_prefix(fallback: str = "192.168.1") -> str:
    """Return the /24 prefix of the first active interface."""

    for iface in get_local_interfaces():
        return network_prefix(iface.ip)
    return fallback


__all__ = ["DEFAULT_NETMASK", "InterfaceInfo", "default_scan_prefix", "get_local_interfaces"]
