"""Wi-Fi link and nearby network metadata scraped from platform tools.

Everything here is display-only. Each ``parse_*`` function takes the raw
text of one tool so it can be tested without the tool installed.
"""
from __future__ import annotations

import platform
import re
from dataclasses import dataclass

from .process import run_command

AIRPORT = (
    "/System/Library/PrivateFrameworks/Apple80211.framework/"
    "Versions/Current/Resources/airport"
)
WIRELESS_INTERFACES = ("wlan0", "wlan1", "wlp0s20f3", "wlp2s0")
_SIGNED_INT_RE = re.compile(r"^-?\d+$")
_BSSID_RE = re.compile(r"^(?:[0-9A-Fa-f]{1,2}:){5}[0-9A-Fa-f]{1,2}$")


@dataclass(frozen=True)
class WifiNetwork:
    """One access point seen by a Wi-Fi scan."""

    ssid: str
    signal: int
    channel: str = ""
    security: str = ""
    # ``signal`` is dBm when True, otherwise a 0-100 quality percentage
    rssi: bool = False

    @property
    def dbm(self) -> int:
        return self.signal if self.rssi else -100 + self.signal


@dataclass(frozen=True)
class WifiConnection:
    """The network an interface is currently associated with."""

    ssid: str
    detail: str = ""

    def __str__(self) -> str:
        return f"{self.ssid} ({self.detail})" if self.detail else self.ssid


def signal_bar(rssi: int) -> str:
    """Render a dBm value as four block characters."""

    if rssi >= -50:
        bars = 4
    elif rssi >= -60:
        bars = 3
    elif rssi >= -70:
        bars = 2
    elif rssi >= -80:
        bars = 1
    else:
        bars = 0
    return "█" * bars + "░" * (4 - bars)


def _int(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


def parse_nmcli_active(output: str) -> list[WifiConnection]:
    """Parse ``nmcli -t -f active,ssid,signal,chan d wifi``."""

    connections = []
    for line in output.splitlines():
        if not line.startswith("yes:"):
            continue
        parts = line.split(":")
        if len(parts) >= 4:
            connections.append(
                WifiConnection(parts[1], f"{parts[2]}%, CH {parts[3]}")
            )
    return connections


def parse_nmcli_list(output: str) -> list[WifiNetwork]:
    """Parse ``nmcli -t -f SSID,SIGNAL,CHAN,SECURITY d wifi list``."""

    networks = []
    for line in output.splitlines():
        if not line.strip():
            continue
        parts = line.split(":")
        if len(parts) < 4:
            continue
        networks.append(
            WifiNetwork(
                ssid=parts[0] or "(Hidden)",
                signal=_int(parts[1], 0),
                channel=parts[2],
                security=parts[3],
            )
        )
    return networks


def parse_iwlist(output: str) -> list[WifiNetwork]:
    """Parse ``iwlist <iface> scan`` cell blocks."""

    networks = []
    ssid: str | None = None
    signal: str | None = None
    for line in output.splitlines():
        text = line.strip()
        if text.startswith("ESSID:"):
            ssid = text[len("ESSID:"):].strip('"')
        elif "Signal level=" in text:
            signal = text.split("Signal level=", 1)[1].split(" ")[0]
        if ssid is not None and signal is not None:
            # ``-47`` (dBm) or ``70/100`` (quality)
            if "/" in signal:
                num, _, den = signal.partition("/")
                quality = _int(num, 0) * 100 // max(_int(den, 100), 1)
                networks.append(WifiNetwork(ssid or "(Hidden)", quality))
            else:
                networks.append(WifiNetwork(ssid or "(Hidden)", _int(signal, -100), rssi=True))
            ssid = signal = None
    return networks


def parse_airport_scan(output: str) -> list[WifiNetwork]:
    """Parse macOS ``airport -s`` rows (header line skipped).

    Columns are ``SSID BSSID RSSI CHANNEL HT CC SECURITY``. The SSID may hold
    spaces and newer releases leave BSSID blank, so the row is anchored on the
    first signed integer, the RSSI.
    """

    networks = []
    for line in output.splitlines()[1:]:
        parts = line.split()
        idx = next((i for i, p in enumerate(parts) if i and _SIGNED_INT_RE.match(p)), None)
        if idx is None or len(parts) < idx + 5:
            continue
        name = [p for p in parts[:idx] if not _BSSID_RE.match(p)]
        networks.append(
            WifiNetwork(
                ssid=" ".join(name) or "(Hidden)",
                signal=int(parts[idx]),
                channel=parts[idx + 1],
                security=" ".join(parts[idx + 4:]),
                rssi=True,
            )
        )
    return networks


def parse_system_profiler(output: str) -> list[WifiConnection]:
    """Parse ``system_profiler SPAirPortDataType`` current network blocks."""

    lines = output.splitlines()
    connections = []
    for i, line in enumerate(lines):
        if "Current Network Information:" not in line or i + 1 >= len(lines):
            continue
        ssid_line = lines[i + 1].strip()
        if not ssid_line.endswith(":"):
            continue
        ssid = ssid_line.rstrip(":")
        phy_mode = channel = ""
        for detail in lines[i + 2:i + 10]:
            detail = detail.strip()
            if detail.startswith("PHY Mode:"):
                phy_mode = detail[len("PHY Mode:"):].strip()
            elif detail.startswith("Channel:"):
                channel = detail[len("Channel:"):].strip()
        if ssid:
            connections.append(WifiConnection(ssid, f"{phy_mode}, {channel}"))
    return connections


def _current_linux() -> list[WifiConnection]:
    output = run_command(["nmcli", "-t", "-f", "active,ssid,signal,chan", "d", "wifi"])
    if output is not None:
        return parse_nmcli_active(output)
    connections = []
    for iface in WIRELESS_INTERFACES:
        ssid = (run_command(["iwgetid", iface, "-r"]) or "").strip()
        if ssid:
            connections.append(WifiConnection(ssid, iface))
    return connections


def get_current_connection() -> str:
    """Return a one-line summary of the associated Wi-Fi network(s)."""

    system = platform.system().lower()
    if system == "darwin":
        connections = parse_system_profiler(
            run_command(["system_profiler", "SPAirPortDataType"], timeout=10.0) or ""
        )
    elif system == "linux":
        connections = _current_linux()
    else:
        return "Not supported"
    if not connections:
        return "Not connected"
    return " | ".join(str(c) for c in connections)


def scan_wifi_networks(interface: str = "wlan0") -> list[WifiNetwork]:
    """Return nearby networks, strongest first. Empty when unsupported."""

    system = platform.system().lower()
    if system == "darwin":
        networks = parse_airport_scan(run_command([AIRPORT, "-s"], timeout=15.0) or "")
    elif system == "linux":
        output = run_command(
            ["nmcli", "-t", "-f", "SSID,SIGNAL,CHAN,SECURITY", "d", "wifi", "list"],
            timeout=15.0,
            check=True,
        )
        if output is not None:
            networks = parse_nmcli_list(output)
        else:
            networks = parse_iwlist(
                run_command(["iwlist", interface, "scan"], timeout=15.0) or ""
            )
    else:
        networks = []
    return sorted(networks, key=lambda n: n.dbm, reverse=True)


__all__ = [
    "WifiConnection",
    "WifiNetwork",
    "get_current_connection",
    "parse_airport_scan",
    "parse_iwlist",
    "parse_nmcli_active",
    "parse_nmcli_list",
    "parse_system_profiler",
    "scan_wifi_networks",
    "signal_bar",
]
