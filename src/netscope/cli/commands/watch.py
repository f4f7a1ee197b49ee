"""``netscope watch``: re-scan a port range on a fixed interval."""
from __future__ import annotations

import argparse
import json
import logging
import time
from datetime import datetime

from rich.console import Console

from netscope.cli.args import positive_int
from netscope.config import Config

from . import port_scan

logger = logging.getLogger(__name__)

NAME = "watch"
HELP = "Repeatedly scan a port range and report changes"


def add_arguments(parser: argparse.ArgumentParser, config: Config) -> None:
    port_scan.add_scan_arguments(parser, config)
    parser.add_argument(
        "--interval",
        type=float,
        default=float(config.get_int("refresh_interval")),
        help="Seconds between scans",
    )
    parser.add_argument(
        "--count",
        type=positive_int,
        default=None,
        help="Stop after this many scans (default: run until interrupted)",
    )


def run(args: argparse.Namespace, config: Config) -> int:
    target = port_scan.resolve_target(args, config)
    console = Console()
    previous: set[int] | None = None
    rounds = 0
    while args.count is None or rounds < args.count:
        if rounds:
            time.sleep(max(0.0, args.interval))
        rounds += 1
        result = port_scan.scan(args, target, quiet=args.json)
        current = set(result.open_ports)
        stamp = datetime.now().strftime("%H:%M:%S")
        if args.json:
            print(json.dumps({"time": stamp, "open_ports": sorted(current)}))
        else:
            console.print(
                f"[{stamp}] {target.address}:{target.start}-{target.end} "
                f"open: {', '.join(map(str, sorted(current))) or 'none'}",
                highlight=False,
                markup=False,
            )
            if previous is not None:
                for port in sorted(current - previous):
                    console.print(f"  + {port} opened", markup=False)
                for port in sorted(previous - current):
                    console.print(f"  - {port} closed", markup=False)
        if previous is not None and current != previous:
            logger.info("Open ports on %s changed: %s", target.address, sorted(current))
        previous = current
    return 0
