"""``netscope ports``: scan a port range on one host."""
from __future__ import annotations

import argparse
import asyncio
import json

from rich.console import Console

from netscope.cli.args import ms, parse_range, positive_int
from netscope.cli.render import make_progress, port_table
from netscope.config import Config
from netscope.scan import CallbackObserver, PortScanResult, ScanTarget, async_scan_ports

NAME = "ports"
HELP = "Scan a TCP port range on one host"


def add_scan_arguments(parser: argparse.ArgumentParser, config: Config) -> None:
    """Options shared by every command that scans a port range."""

    parser.add_argument("target", nargs="?", help="Host to scan (default: from config)")
    parser.add_argument(
        "-r",
        "--range",
        type=parse_range,
        help="Port range such as 1-1024, 80 or ssh (default: from config)",
    )
    parser.add_argument(
        "--timeout",
        type=ms,
        default=config.get_int("timeout_ms") / 1000.0,
        metavar="MS",
        help="Connect timeout in milliseconds",
    )
    parser.add_argument(
        "--concurrency",
        type=positive_int,
        default=config.get_int("concurrency"),
        help="Maximum simultaneous connection attempts",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")


def add_arguments(parser: argparse.ArgumentParser, config: Config) -> None:
    add_scan_arguments(parser, config)
    parser.add_argument("--show-closed", action="store_true", help="List closed ports too")


def resolve_target(args: argparse.Namespace, config: Config) -> ScanTarget:
    start, end = args.range or (config.get_int("start_port"), config.get_int("end_port"))
    return ScanTarget.for_ports(args.target or str(config.get("target")), start, end)


def scan(args: argparse.Namespace, target: ScanTarget, *, quiet: bool = False) -> PortScanResult:
    with make_progress(disable=quiet) as progress:
        task = progress.add_task(f"Scanning {target.address}", total=target.size)
        observer = CallbackObserver(
            progress=lambda scanned, _total: progress.update(task, completed=scanned)
        )
        return asyncio.run(
            async_scan_ports(
                target.address,
                target.start,
                target.end,
                observer,
                timeout=args.timeout,
                concurrency=args.concurrency,
            )
        )


def run(args: argparse.Namespace, config: Config) -> int:
    target = resolve_target(args, config)
    result = scan(args, target, quiet=args.json)
    if args.json:
        print(json.dumps(result.as_dict()))
        return 0
    console = Console()
    console.print(port_table(result, show_closed=args.show_closed))
    console.print(f"Scan complete. Found {len(result.open_ports)} open ports.")
    return 0
