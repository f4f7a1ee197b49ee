"""``netscope wifi``: list nearby Wi-Fi networks."""
from __future__ import annotations

import argparse
import json
from contextlib import nullcontext
from dataclasses import asdict

from rich.console import Console

from netscope.cli.render import wifi_table
from netscope.config import Config
from netscope.system.wifi import get_current_connection, scan_wifi_networks

NAME = "wifi"
HELP = "List nearby Wi-Fi networks"


def add_arguments(parser: argparse.ArgumentParser, config: Config) -> None:
    parser.add_argument("--interface", default="wlan0", help="Interface for iwlist fallback")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")


def run(args: argparse.Namespace, config: Config) -> int:
    console = Console()
    with console.status("Scanning...", spinner="dots") if not args.json else nullcontext():
        networks = scan_wifi_networks(args.interface)
        current = get_current_connection()
    if args.json:
        print(json.dumps({"current": current, "networks": [asdict(n) for n in networks]}))
        return 0
    console.print(f"Connected: {current}", markup=False)
    if not networks:
        console.print("No Wi-Fi networks found")
        return 0
    console.print(wifi_table(networks))
    return 0
