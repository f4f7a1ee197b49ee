"""TCP connect probing of a contiguous port range on one host."""

from __future__ import annotations

import asyncio
import logging
import os
import time
from typing import Awaitable, Callable

from .events import ScanObserver, notify
from .models import PortScanResult
from .session import ScanSession

logger = logging.getLogger(__name__)

# Defaults can be tuned via environment variables without code changes.
DEFAULT_PORT_TIMEOUT = float(os.environ.get("NETSCOPE_PORT_TIMEOUT", 0.1))
DEFAULT_CONCURRENCY = int(os.environ.get("NETSCOPE_CONCURRENCY", 50))

# Display names for well known ports. Unknown ports map to "".
PORT_NAMES: dict[int, str] = {
    20: "FTP-DATA",
    21: "FTP",
    22: "SSH",
    23: "Telnet",
    25: "SMTP",
    53: "DNS",
    80: "HTTP",
    110: "POP3",
    143: "IMAP",
    443: "HTTPS",
    445: "SMB",
    993: "IMAPS",
    995: "POP3S",
    1433: "MSSQL",
    3306: "MySQL",
    3389: "RDP",
    5432: "PostgreSQL",
    6379: "Redis",
    8080: "HTTP-Alt",
    8443: "HTTPS-Alt",
    27017: "MongoDB",
}

Connector = Callable[[str, int], Awaitable[tuple[asyncio.StreamReader, asyncio.StreamWriter]]]
PortProbe = Callable[[str, int, float], Awaitable[bool]]


def get_port_name(port: int) -> str:
    """Return the display name for ``port`` or an empty string."""

    return PORT_NAMES.get(port, "")


async def _open_connection(
    host: str, port: int
) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
    return await asyncio.open_connection(host, port)


async def async_probe_port(
    host: str,
    port: int,
    timeout: float = DEFAULT_PORT_TIMEOUT,
    *,
    connect: Connector | None = None,
) -> bool:
    """Return ``True`` if a TCP connection to ``host:port`` opens in time.

    The connect attempt races ``timeout``. When the timer wins the attempt is
    cancelled, so a connection that would have completed later is dropped.
    Errors never propagate; they mean the port is closed.
    """

    opener = connect or _open_connection
    try:
        _reader, writer = await asyncio.wait_for(opener(host, port), timeout=timeout)
    except (OSError, asyncio.TimeoutError) as exc:
        logger.debug("Port %s:%d closed (%s)", host, port, type(exc).__name__)
        return False
    try:
        writer.close()
        await writer.wait_closed()
    except OSError:
        pass
    return True


async def async_scan_ports(
    host: str,
    start_port: int,
    end_port: int,
    observer: ScanObserver[PortScanResult] | None = None,
    *,
    timeout: float = DEFAULT_PORT_TIMEOUT,
    concurrency: int = DEFAULT_CONCURRENCY,
    probe: PortProbe | None = None,
) -> PortScanResult:
    """Probe every port in ``[start_port, end_port]`` on ``host``.

    ``concurrency`` caps the number of connection attempts in flight. The
    observer receives one progress message per port in completion order and a
    single completion message carrying the ordered result.
    """

    probe = probe or async_probe_port
    ports = range(start_port, end_port + 1)
    session = ScanSession(
        len(ports), concurrency=concurrency, timeout=timeout, observer=observer
    )
    logger.info(
        "Scanning %s ports %d-%d (timeout=%.3fs, concurrency=%d)",
        host, start_port, end_port, timeout, session.gate.limit,
    )
    started = time.perf_counter()

    async def unit(port: int) -> tuple[int, bool]:
        async with session.gate:
            try:
                is_open = await probe(host, port, session.timeout)
            except Exception:
                logger.debug("Probe for %s:%d raised", host, port, exc_info=True)
                is_open = False
        return port, bool(is_open)

    outcomes = await session.fan_out(ports, unit)
    result = PortScanResult(host, outcomes)
    logger.info(
        "Port scan of %s finished in %.2fs: %d open of %d",
        host, time.perf_counter() - started, len(result.open_ports), len(result),
    )
    notify(observer, "on_complete", result)
    return result


def scan_ports(
    host: str,
    start_port: int,
    end_port: int,
    observer: ScanObserver[PortScanResult] | None = None,
    *,
    timeout: float = DEFAULT_PORT_TIMEOUT,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> PortScanResult:
    """Blocking wrapper around :func:`async_scan_ports`."""

    return asyncio.run(
        async_scan_ports(
            host,
            start_port,
            end_port,
            observer,
            timeout=timeout,
            concurrency=concurrency,
        )
    )


class PortRangeScanner:
    """Scan settings bound to a reusable object."""

    def __init__(
        self,
        timeout: float = DEFAULT_PORT_TIMEOUT,
        concurrency: int = DEFAULT_CONCURRENCY,
        *,
        probe: PortProbe | None = None,
    ) -> None:
        self.timeout = timeout
        self.concurrency = concurrency
        self.probe = probe

    async def scan(
        self,
        host: str,
        start_port: int,
        end_port: int,
        observer: ScanObserver[PortScanResult] | None = None,
    ) -> PortScanResult:
        return await async_scan_ports(
            host,
            start_port,
            end_port,
            observer,
            timeout=self.timeout,
            concurrency=self.concurrency,
            probe=self.probe,
        )


__all__ = [
    "DEFAULT_CONCURRENCY",
    "DEFAULT_PORT_TIMEOUT",
    "PORT_NAMES",
    "PortProbe",
    "PortRangeScanner",
    "async_probe_port",
    "async_scan_ports",
    "get_port_name",
    "scan_ports",
]
