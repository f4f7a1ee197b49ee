"""Argument helpers shared by the CLI commands."""
from __future__ import annotations

import socket


def _get_port_number(value: str) -> int:
    """Return the numeric port for ``value`` which may be a service name."""

    value = value.strip()
    if value.isdigit():
        return int(value)
    try:
        return socket.getservbyname(value)
    except OSError:
        raise ValueError(f"Unknown service/port: {value}")


def parse_range(text: str) -> tuple[int, int]:
    """Return ``(start, end)`` from ``"20-25"``, ``"80"`` or ``"ssh"``.

    Bounds are not clamped here; :class:`~netscope.scan.models.ScanTarget`
    normalizes them.
    """

    if "-" in text:
        start_s, end_s = text.split("-", 1)
    else:
        start_s = end_s = text
    return _get_port_number(start_s), _get_port_number(end_s)


def ms(value: str) -> float:
    """``argparse`` type converting milliseconds to seconds."""

    millis = float(value)
    if millis <= 0:
        raise ValueError(f"Timeout must be positive: {value}")
    return millis / 1000.0


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise ValueError(f"Expected a positive integer: {value}")
    return number


__all__ = ["ms", "parse_range", "positive_int"]
