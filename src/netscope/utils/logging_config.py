"""Logging setup for netscope: rich console output plus an optional log file."""
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from rich.console import Console
from rich.logging import RichHandler

LOG_FILE_ENV = "NETSCOPE_LOG_FILE"

# Loggers that emit one DEBUG record per probed port or host.
PROBE_LOGGERS = (
    "netscope.scan.ports",
    "netscope.scan.hosts",
    "netscope.system.neighbors",
)

_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def level_for_verbosity(verbose: int) -> int:
    """Map the CLI ``-v`` count to a console log level."""

    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbose: int = 0, log_file: str | None = None) -> int:
    """Configure root logging for one CLI run and return the console level.

    Records go to stderr through :class:`RichHandler` so ``--json`` output on
    stdout stays parseable. ``log_file`` (or ``NETSCOPE_LOG_FILE``) adds a
    rotating plain-text file that keeps DEBUG records regardless of ``-v``.
    Per-probe DEBUG lines are held back everywhere unless ``verbose >= 2``.
    """

    level = level_for_verbosity(verbose)
    if log_file is None:
        log_file = os.getenv(LOG_FILE_ENV)

    console_handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        markup=False,
        rich_tracebacks=verbose >= 2,
        show_path=verbose >= 2,
    )
    handlers: list[logging.Handler] = [console_handler]
    if log_file:
        file_handler = RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=5)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if log_file else level,
        handlers=handlers,
        format="%(message)s",
        force=True,
    )
    probe_level = logging.NOTSET if verbose >= 2 else logging.INFO
    for name in PROBE_LOGGERS:
        logging.getLogger(name).setLevel(probe_level)
    return level


__all__ = ["LOG_FILE_ENV", "PROBE_LOGGERS", "level_for_verbosity", "setup_logging"]
