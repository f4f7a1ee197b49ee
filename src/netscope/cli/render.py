"""Rich renderables for scan results."""
from __future__ import annotations

from typing import Iterable

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from netscope.scan import HostResult, PortScanResult, get_port_name
from netscope.system.interfaces import InterfaceInfo
from netscope.system.wifi import WifiNetwork, signal_bar


def make_progress(disable: bool = False) -> Progress:
    return Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        disable=disable,
    )


def port_table(result: PortScanResult, *, show_closed: bool = False) -> Table:
    table = Table(title=Text(f"Ports on {result.host}"), expand=False)
    table.add_column("Port", justify="right")
    table.add_column("State")
    table.add_column("Service")
    for port, is_open in result.items():
        if not is_open and not show_closed:
            continue
        state = "[green]OPEN[/green]" if is_open else "[dim]closed[/dim]"
        table.add_row(str(port), state, get_port_name(port))
    if not result.open_ports and not show_closed:
        table.caption = "No open ports found"
    return table


def host_line(host: HostResult) -> str:
    """Format a live discovery as one line of plain text."""

    name = host.hostname or ""
    if len(name) > 22:
        name = name[:19] + "..."
    ports = f" [{len(host.open_ports)} ports]" if host.open_ports else ""
    return (
        f"{host.ip:<16} {name:<22} {host.response_time:>6.1f}ms "
        f"{host.mac or ''}{ports}"
    )


def host_table(hosts: Iterable[HostResult], title: str = "Live hosts") -> Table:
    table = Table(title=title)
    table.add_column("IP Address")
    table.add_column("Hostname")
    table.add_column("RTT", justify="right")
    table.add_column("MAC")
    table.add_column("Open ports")
    for host in hosts:
        table.add_row(
            host.ip,
            Text(host.hostname or ""),
            f"{host.response_time:.1f}ms",
            host.mac or "",
            host.ports_display(),
        )
    return table


def wifi_table(networks: Iterable[WifiNetwork]) -> Table:
    table = Table(title="Wi-Fi networks")
    table.add_column("SSID")
    table.add_column("Signal")
    table.add_column("", justify="right")
    table.add_column("CH", justify="right")
    table.add_column("Security")
    for net in networks:
        level = f"{net.signal} dBm" if net.rssi else f"{net.signal}%"
        table.add_row(
            Text(net.ssid), signal_bar(net.dbm), level, Text(net.channel), Text(net.security)
        )
    return table


def interface_table(rows: Iterable[tuple[InterfaceInfo, str]]) -> Table:
    table = Table(title="Interfaces")
    table.add_column("Name")
    table.add_column("IPv4")
    table.add_column("Netmask")
    table.add_column("DHCP")
    for iface, dhcp in rows:
        table.add_row(Text(iface.name), iface.ip, iface.netmask, Text(dhcp))
    return table


__all__ = [
    "host_line",
    "host_table",
    "interface_table",
    "make_progress",
    "port_table",
    "wifi_table",
]
