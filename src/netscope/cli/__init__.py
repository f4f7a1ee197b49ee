"""Command line entry point for netscope."""
from __future__ import annotations

import argparse
import logging
from typing import Sequence

from netscope import __version__
from netscope.config import Config
from netscope.errors import ConfigError, NetscopeError
from netscope.utils.logging_config import setup_logging

from . import commands

logger = logging.getLogger(__name__)


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="netscope",
        description="Concurrent port and host discovery",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug including every probe)",
    )
    parser.add_argument("--log-file", help="Also write DEBUG logs to this file")
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True
    for name in commands.COMMAND_ORDER:
        module = commands.load(name)
        command_parser = sub.add_parser(
            module.NAME, help=module.HELP, description=module.HELP
        )
        module.add_arguments(command_parser, config)
        command_parser.set_defaults(handler=module.run)
    return parser


def main(argv: Sequence[str] | None = None, *, config: Config | None = None) -> int:
    config = config or Config()
    try:
        parser = build_parser(config)
    except ConfigError as exc:
        # command defaults are read from the settings file
        argparse.ArgumentParser(prog="netscope").error(f"{config.config_file}: {exc}")
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    try:
        return int(args.handler(args, config) or 0)
    except NetscopeError as exc:
        parser.error(str(exc))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
    return 0


__all__ = ["build_parser", "main"]
