"""DHCP lease metadata for an interface, for display only."""
from __future__ import annotations

import platform

from .process import run_command


def format_lease(seconds: int) -> str:
    hours, rest = divmod(seconds, 3600)
    minutes = rest // 60
    return f"{hours}h{minutes}m" if hours > 0 else f"{minutes}m"


def parse_ipconfig_packet(output: str) -> str:
    """Parse macOS ``ipconfig getpacket <iface>``."""

    if not output.strip() or "no DHCP" in output:
        return "Static IP"
    server = lease = ""
    for line in output.splitlines():
        text = line.strip()
        if text.startswith("server_identifier"):
            server = text.split(":", 1)[1].strip() if ":" in text else ""
        elif text.startswith("lease_time"):
            value = text.split(":", 1)[1].strip() if ":" in text else ""
            if value.lower().startswith("0x"):
                try:
                    lease = format_lease(int(value[2:], 16))
                except ValueError:
                    pass
    if server:
        return f"Server: {server} | Lease: {lease}"
    return "Static IP"


def parse_nmcli_device(output: str) -> str:
    """Parse ``nmcli -t -f IP4.ADDRESS,IP4.GATEWAY,DHCP4.OPTION device show``."""

    server = lease = ""
    for line in output.splitlines():
        if "=" not in line:
            continue
        value = line.split("=", 1)[1].strip()
        if "dhcp_server_identifier" in line:
            server = value
        elif "expiry" in line or "lease_time" in line:
            lease = value
    if server:
        return f"Server: {server} | Lease: {lease}"
    return "Static IP or Unknown"


def get_dhcp_info(interface: str) -> str:
    """Return a one-line DHCP summary for ``interface``."""

    system = platform.system().lower()
    if system == "darwin":
        output = run_command(["ipconfig", "getpacket", interface])
        return "Unknown" if output is None else parse_ipconfig_packet(output)
    if system == "linux":
        output = run_command(
            [
                "nmcli", "-t", "-f", "IP4.ADDRESS,IP4.GATEWAY,DHCP4.OPTION",
                "device", "show", interface,
            ]
        )
        return "Unknown" if output is None else parse_nmcli_device(output)
    return "Unknown"


__all__ = ["format_lease", "get_dhcp_info", "parse_ipconfig_packet", "parse_nmcli_device"]
