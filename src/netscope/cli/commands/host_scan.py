"""``netscope hosts``: discover live hosts on a /24 prefix."""
from __future__ import annotations

import argparse
import asyncio
import json

from rich.console import Console

from netscope.cli.args import ms, parse_range, positive_int
from netscope.cli.render import host_line, host_table, make_progress
from netscope.config import Config
from netscope.scan import (
    HostFoundEvent,
    HostResult,
    ProgressEvent,
    ScanTarget,
    async_stream_hosts,
)
from netscope.system.interfaces import default_scan_prefix
from netscope.system.neighbors import get_mac_address

NAME = "hosts"
HELP = "Discover live hosts on a subnet"


def add_arguments(parser: argparse.ArgumentParser, config: Config) -> None:
    parser.add_argument(
        "prefix",
        nargs="?",
        help="Network prefix such as 192.168.1 (default: first local interface)",
    )
    parser.add_argument(
        "-r",
        "--range",
        type=parse_range,
        help="Host number range such as 1-254 (default: from config)",
    )
    parser.add_argument(
        "--timeout",
        type=ms,
        default=config.get_int("host_timeout_ms") / 1000.0,
        metavar="MS",
        help="Ping timeout in milliseconds",
    )
    parser.add_argument(
        "--concurrency",
        type=positive_int,
        default=config.get_int("concurrency"),
        help="Maximum hosts probed at once",
    )
    parser.add_argument("--no-mac", action="store_true", help="Skip the ARP lookup")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")


async def _scan(args: argparse.Namespace, target: ScanTarget) -> list[HostResult]:
    hosts: list[HostResult] = []
    with make_progress(disable=args.json) as progress:
        task = progress.add_task(f"Scanning {target.address}.x", total=target.size)
        events = async_stream_hosts(
            target.address,
            target.start,
            target.end,
            timeout=args.timeout,
            concurrency=args.concurrency,
            lookup_mac=None if args.no_mac else get_mac_address,
        )
        async for event in events:
            if isinstance(event, ProgressEvent):
                progress.update(task, completed=event.progress.scanned)
            elif isinstance(event, HostFoundEvent):
                if not args.json:
                    progress.console.print(host_line(event.host), highlight=False, markup=False)
            else:
                hosts = list(event.result)
    return hosts


def run(args: argparse.Namespace, config: Config) -> int:
    start, end = args.range or (config.get_int("subnet_start"), config.get_int("subnet_end"))
    target = ScanTarget.for_subnet(args.prefix or default_scan_prefix(), start, end)
    console = Console()
    hosts = asyncio.run(_scan(args, target))
    if args.json:
        print(json.dumps({"prefix": target.address, "hosts": [h.as_dict() for h in hosts]}))
        return 0
    console.print(host_table(hosts, title=f"Live hosts on {target.address}.{target.start}-{target.end}"))
    console.print(f"Complete - found {len(hosts)} hosts.")
    return 0
