"""``netscope info``: local interfaces, DHCP leases and the Wi-Fi link."""
from __future__ import annotations

import argparse
import json

from rich.console import Console

from netscope.cli.render import interface_table
from netscope.config import Config
from netscope.system.dhcp import get_dhcp_info
from netscope.system.interfaces import get_local_interfaces
from netscope.system.wifi import get_current_connection

NAME = "info"
HELP = "Show local interfaces and network metadata"


def add_arguments(parser: argparse.ArgumentParser, config: Config) -> None:
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")


def run(args: argparse.Namespace, config: Config) -> int:
    rows = [(iface, get_dhcp_info(iface.name)) for iface in get_local_interfaces()]
    wifi = get_current_connection()
    if args.json:
        payload = {
            "interfaces": [
                {"name": i.name, "ip": i.ip, "netmask": i.netmask, "dhcp": dhcp}
                for i, dhcp in rows
            ],
            "wifi": wifi,
        }
        print(json.dumps(payload))
        return 0
    console = Console()
    if rows:
        console.print(interface_table(rows))
    else:
        console.print("No active IPv4 interfaces")
    console.print(f"Wi-Fi: {wifi}", markup=False)
    return 0
