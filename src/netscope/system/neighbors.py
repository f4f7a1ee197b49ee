"""Reverse DNS and neighbour-cache (ARP) lookups."""

from __future__ import annotations

import asyncio
import logging
import platform
import re
import shutil
import socket

from .process import run_command

logger = logging.getLogger(__name__)

# Six hex byte groups separated by ':' or '-'. macOS prints single digit
# groups such as ``0:1c:42:a:b:c`` so one or two digits are accepted.
_MAC_RE = re.compile(
    r"(?<![0-9A-Fa-f:-])((?:[0-9A-Fa-f]{1,2}[:-]){5}[0-9A-Fa-f]{1,2})(?![0-9A-Fa-f:-])"
)


def normalize_mac(mac: str) -> str:
    """Return ``mac`` as upper case, zero padded, colon separated."""

    parts = re.split(r"[:-]", mac.strip())
    return ":".join(part.zfill(2) for part in parts).upper()


def parse_mac(output: str, ip: str) -> str | None:
    """Return the MAC address listed for ``ip`` in neighbour table ``output``."""

    pattern = re.compile(rf"(?<![\d.]){re.escape(ip)}(?![\d.])")
    for line in output.splitlines():
        if not pattern.search(line):
            continue
        match = _MAC_RE.search(line)
        if match:
            return normalize_mac(match.group(1))
    return None


def _neighbor_commands(ip: str) -> list[list[str]]:
    if platform.system().lower() == "windows":
        return [["arp", "-a", ip]]
    commands = [["arp", "-n", ip]]
    if shutil.which("ip"):
        commands.append(["ip", "neighbor", "show", ip])
    return commands


def get_mac_address(ip: str) -> str | None:
    """Return the MAC address for ``ip`` from the system neighbour cache.

    Only hosts on the local segment have an entry, and only after some
    traffic reached them. Any failure returns ``None``.
    """

    for cmd in _neighbor_commands(ip):
        output = run_command(cmd, timeout=2.0)
        if not output:
            continue
        mac = parse_mac(output, ip)
        if mac:
            return mac
    return None


def get_hostname(ip: str) -> str | None:
    """Return the reverse DNS name for ``ip``."""

    try:
        name = socket.gethostbyaddr(ip)[0]
    except (OSError, UnicodeError) as exc:
        logger.debug("Reverse lookup for %s failed: %s", ip, exc)
        return None
    return name or None


async def async_get_hostname(ip: str, *, timeout: float | None = None) -> str | None:
    """Return the hostname for ``ip`` without blocking the event loop.

    With ``timeout`` the lookup is abandoned once the timer runs out.
    """

    loop = asyncio.get_running_loop()
    lookup = loop.run_in_executor(None, get_hostname, ip)
    try:
        if timeout is None:
            return await lookup
        return await asyncio.wait_for(lookup, timeout)
    except asyncio.TimeoutError:
        logger.debug("Reverse lookup for %s timed out", ip)
        return None


__all__ = [
    "async_get_hostname",
    "get_hostname",
    "get_mac_address",
    "normalize_mac",
    "parse_mac",
]
