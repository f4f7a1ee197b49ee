"""ICMP discovery of live hosts across a /24 host-number range."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import math
import os
import platform
import re
import time
from typing import AsyncIterator, Awaitable, Callable, Iterable

from netscope.system.neighbors import async_get_hostname, get_mac_address

from .events import QueueObserver, ScanEvent, ScanObserver, notify
from .models import HostResult
from .ports import DEFAULT_CONCURRENCY, async_probe_port
from .session import AdmissionGate, ScanSession, ip_sort_key

logger = logging.getLogger(__name__)

DEFAULT_HOST_TIMEOUT = float(os.environ.get("NETSCOPE_HOST_TIMEOUT", 1.0))
DEFAULT_QUICK_TIMEOUT = float(os.environ.get("NETSCOPE_QUICK_TIMEOUT", 0.2))
_PING_KILL_GRACE = 0.5

# FTP, SSH, Telnet, HTTP, HTTPS, SMB, RDP, HTTP-alt
QUICK_PORTS: tuple[int, ...] = (21, 22, 23, 80, 443, 445, 3389, 8080)

# ``time=0.045 ms`` on Unix, ``time<1ms`` / ``time=12ms`` on Windows.
_RTT_RE = re.compile(r"time[=<]\s*([\d.]+)\s*ms", re.IGNORECASE)

HostProbe = Callable[[str, float], Awaitable["HostResult | None"]]
Pinger = Callable[[str, float], Awaitable["float | None"]]
MacLookup = Callable[[str], "str | None"]


def build_ping_command(host: str, timeout: float) -> list[str]:
    """Return a single-echo ping command.

    The ``-W``/``-w`` wait is only an upper bound for the OS tool; the caller
    still races ``timeout`` itself and kills the process when it runs out.
    """

    timeout = max(timeout, 0.001)
    system = platform.system().lower()
    if system == "windows":
        wait_ms = max(1, int(math.ceil(timeout * 1000)))
        return ["ping", "-n", "1", "-w", str(wait_ms), host]
    if system == "darwin":
        # macOS takes the reply wait in milliseconds
        wait_ms = max(1, int(math.ceil(timeout * 1000)))
        return ["ping", "-c", "1", "-W", str(wait_ms), host]
    # Linux iputils only accepts whole seconds
    return ["ping", "-c", "1", "-W", str(max(1, int(math.ceil(timeout)))), host]


def parse_ping_time(output: str) -> float | None:
    """Return the round trip in milliseconds reported by ``ping``."""

    match = _RTT_RE.search(output)
    if not match:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        return None


async def _reap(proc: asyncio.subprocess.Process) -> None:
    with contextlib.suppress(ProcessLookupError):
        proc.kill()
    with contextlib.suppress(asyncio.TimeoutError, ProcessLookupError):
        await asyncio.wait_for(proc.communicate(), _PING_KILL_GRACE)


async def async_ping(host: str, timeout: float = DEFAULT_HOST_TIMEOUT) -> float | None:
    """Send one ICMP echo to ``host`` via the system ``ping``.

    Returns the round trip time in milliseconds, or ``None`` when the host did
    not answer within ``timeout`` seconds, counted from before the process is
    spawned. When the timer wins the ping process is killed and any reply it
    would have printed later is discarded.
    """

    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    start_ts = time.perf_counter()
    try:
        proc = await asyncio.create_subprocess_exec(
            *build_ping_command(host, timeout),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
        )
    except OSError as exc:
        logger.debug("Unable to run ping for %s: %s", host, exc)
        return None

    remaining = deadline - loop.time()
    try:
        if remaining <= 0:
            raise asyncio.TimeoutError
        out, _ = await asyncio.wait_for(proc.communicate(), remaining)
    except asyncio.TimeoutError:
        logger.debug("Ping of %s timed out after %.3fs", host, timeout)
        await _reap(proc)
        return None

    elapsed_ms = (time.perf_counter() - start_ts) * 1000.0
    text = out.decode(errors="replace") if out else ""
    if proc.returncode != 0:
        return None
    # Windows exits 0 for "Destination host unreachable" replies
    if platform.system().lower() == "windows" and "ttl=" not in text.lower():
        return None
    rtt = parse_ping_time(text)
    if rtt is None:
        rtt = elapsed_ms
    if rtt > timeout * 1000.0:
        logger.debug("Late reply from %s discarded (%.1fms)", host, rtt)
        return None
    return round(rtt, 2)



async def async_quick_port_scan(
    ip: str,
    ports: Iterable[int] = QUICK_PORTS,
    timeout: float = DEFAULT_QUICK_TIMEOUT,
) -> list[int]:
    """Return the open ports among ``ports`` on ``ip``.

    All ports are probed at once under their own gate, so the pass takes about
    one ``timeout`` no matter how many ports are listed.
    """

    port_list = sorted(set(int(p) for p in ports))
    if not port_list:
        return []
    gate = AdmissionGate(len(port_list))

    async def probe(port: int) -> int | None:
        async with gate:
            return port if await async_probe_port(ip, port, timeout) else None

    found = await asyncio.gather(*(probe(p) for p in port_list))
    return [p for p in found if p is not None]


async def async_probe_host(
    ip: str,
    timeout: float = DEFAULT_HOST_TIMEOUT,
    *,
    ping: Pinger | None = None,
    quick_ports: Iterable[int] = QUICK_PORTS,
    quick_timeout: float = DEFAULT_QUICK_TIMEOUT,
    resolve_hostname: bool = True,
) -> HostResult | None:
    """Ping ``ip`` and, if it answers, collect its hostname and open ports.

    The hostname lookup and the quick port pass run side by side. Either one
    failing only leaves its field empty. Unreachable hosts return ``None``.
    """

    pinger = ping or async_ping
    try:
        rtt = await pinger(ip, timeout)
    except Exception:
        logger.debug("Ping of %s raised", ip, exc_info=True)
        rtt = None
    if rtt is None:
        return None

    async def hostname() -> str | None:
        if not resolve_hostname:
            return None
        return await async_get_hostname(ip, timeout=timeout)

    name, open_ports = await asyncio.gather(
        hostname(),
        async_quick_port_scan(ip, quick_ports, quick_timeout),
    )
    return HostResult(ip, hostname=name, response_time=rtt, open_ports=tuple(open_ports))


def _lookup_mac(lookup: MacLookup, ip: str) -> str | None:
    try:
        return lookup(ip)
    except Exception:
        logger.debug("MAC lookup for %s failed", ip, exc_info=True)
        return None


async def async_scan_hosts(
    prefix: str,
    start_host: int,
    end_host: int,
    observer: ScanObserver[list[HostResult]] | None = None,
    *,
    timeout: float = DEFAULT_HOST_TIMEOUT,
    concurrency: int = DEFAULT_CONCURRENCY,
    probe: HostProbe | None = None,
    lookup_mac: MacLookup | None = get_mac_address,
) -> list[HostResult]:
    """Discover live hosts ``prefix.start_host`` .. ``prefix.end_host``.

    ``observer.on_host_found`` fires as soon as each live host's record is
    ready, in completion order. The returned list holds the same hosts sorted
    by numeric address and is also passed to ``observer.on_complete``.
    """

    probe = probe or async_probe_host
    numbers = range(start_host, end_host + 1)
    session = ScanSession(
        len(numbers), concurrency=concurrency, timeout=timeout, observer=observer
    )
    loop = asyncio.get_running_loop()
    logger.info(
        "Scanning %s.%d-%d (timeout=%.3fs, concurrency=%d)",
        prefix, start_host, end_host, timeout, session.gate.limit,
    )
    started = time.perf_counter()

    async def unit(number: int) -> HostResult | None:
        ip = f"{prefix}.{number}"
        async with session.gate:
            try:
                host = await probe(ip, session.timeout)
            except Exception:
                logger.debug("Host probe for %s raised", ip, exc_info=True)
                host = None
        if host is None:
            return None
        if lookup_mac is not None and host.mac is None:
            # one blocking neighbour-cache call per live host, outside the gate
            host.mac = await loop.run_in_executor(None, _lookup_mac, lookup_mac, ip)
        notify(observer, "on_host_found", host)
        return host

    outcomes = await session.fan_out(numbers, unit)
    hosts = sorted((h for h in outcomes if h is not None), key=lambda h: ip_sort_key(h.ip))
    logger.info(
        "Host scan of %s finished in %.2fs: %d alive of %d",
        prefix, time.perf_counter() - started, len(hosts), session.total,
    )
    notify(observer, "on_complete", hosts)
    return hosts


async def async_stream_hosts(
    prefix: str,
    start_host: int,
    end_host: int,
    *,
    timeout: float = DEFAULT_HOST_TIMEOUT,
    concurrency: int = DEFAULT_CONCURRENCY,
    probe: HostProbe | None = None,
    lookup_mac: MacLookup | None = get_mac_address,
) -> AsyncIterator[ScanEvent]:
    """Yield progress, host-found and completion messages as they happen.

    The last message is always the completion. If the consumer stops early
    the scan still runs to the end before the generator closes.
    """

    observer = QueueObserver()
    task = asyncio.create_task(
        async_scan_hosts(
            prefix,
            start_host,
            end_host,
            observer,
            timeout=timeout,
            concurrency=concurrency,
            probe=probe,
            lookup_mac=lookup_mac,
        )
    )
    try:
        while True:
            if task.done() and observer.queue.empty():
                task.result()
                return
            getter = asyncio.ensure_future(observer.queue.get())
            await asyncio.wait({getter, task}, return_when=asyncio.FIRST_COMPLETED)
            if getter.done():
                yield getter.result()
            else:
                getter.cancel()
    finally:
        if not task.done():
            await task


def scan_hosts(
    prefix: str,
    start_host: int,
    end_host: int,
    observer: ScanObserver[list[HostResult]] | None = None,
    *,
    timeout: float = DEFAULT_HOST_TIMEOUT,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> list[HostResult]:
    """Blocking wrapper around :func:`async_scan_hosts`."""

    return asyncio.run(
        async_scan_hosts(
            prefix,
            start_host,
            end_host,
            observer,
            timeout=timeout,
            concurrency=concurrency,
        )
    )


class SubnetScanner:
    """Host discovery settings bound to a reusable object."""

    def __init__(
        self,
        timeout: float = DEFAULT_HOST_TIMEOUT,
        concurrency: int = DEFAULT_CONCURRENCY,
        *,
        probe: HostProbe | None = None,
        lookup_mac: MacLookup | None = get_mac_address,
    ) -> None:
        self.timeout = timeout
        self.concurrency = concurrency
        self.probe = probe
        self.lookup_mac = lookup_mac

    async def scan(
        self,
        prefix: str,
        start_host: int,
        end_host: int,
        observer: ScanObserver[list[HostResult]] | None = None,
    ) -> list[HostResult]:
        return await async_scan_hosts(
            prefix,
            start_host,
            end_host,
            observer,
            timeout=self.timeout,
            concurrency=self.concurrency,
            probe=self.probe,
            lookup_mac=self.lookup_mac,
        )

    def stream(self, prefix: str, start_host: int, end_host: int) -> AsyncIterator[ScanEvent]:
        return async_stream_hosts(
            prefix,
            start_host,
            end_host,
            timeout=self.timeout,
            concurrency=self.concurrency,
            probe=self.probe,
            lookup_mac=self.lookup_mac,
        )


__all__ = [
    "DEFAULT_HOST_TIMEOUT",
    "DEFAULT_QUICK_TIMEOUT",
    "QUICK_PORTS",
    "HostProbe",
    "SubnetScanner",
    "async_ping",
    "async_probe_host",
    "async_quick_port_scan",
    "async_scan_hosts",
    "async_stream_hosts",
    "build_ping_command",
    "parse_ping_time",
    "scan_hosts",
]
