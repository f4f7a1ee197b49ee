"""Admission gate and per-scan bookkeeping shared by both scanners."""
from __future__ import annotations

import asyncio
import ipaddress
from types import TracebackType
from typing import Awaitable, Callable, Iterable, TypeVar

from .events import ScanObserver, notify
from .models import ScanProgress

T = TypeVar("T")
R = TypeVar("R")


def ip_sort_key(ip: str) -> int:
    """Return the big-endian 32-bit value of a dotted IPv4 address.

    Only used to order results for display. Unparseable input sorts first.
    """

    try:
        return int(ipaddress.IPv4Address(ip))
    except ValueError:
        return 0


class AdmissionGate:
    """Counting gate capping simultaneous probes at ``limit``.

    Use as ``async with gate:``. ``in_flight`` and ``peak`` record how many
    holders the gate has right now and at most.
    """

    def __init__(self, limit: int) -> None:
        self.limit = max(1, int(limit))
        self._sem = asyncio.Semaphore(self.limit)
        self.in_flight = 0
        self.peak = 0

    async def __aenter__(self) -> "AdmissionGate":
        await self._sem.acquire()
        self.in_flight += 1
        if self.in_flight > self.peak:
            self.peak = self.in_flight
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.in_flight -= 1
        self._sem.release()


class ScanSession:
    """State owned by exactly one scan invocation."""

    def __init__(
        self,
        total: int,
        *,
        concurrency: int,
        timeout: float,
        observer: ScanObserver | None = None,
    ) -> None:
        self.total = total
        self.timeout = timeout
        self.observer = observer
        self.gate = AdmissionGate(max(1, min(concurrency, total or 1)))
        self.scanned = 0

    @property
    def progress(self) -> ScanProgress:
        return ScanProgress(self.scanned, self.total)

    def advance(self) -> None:
        """Count one finished unit and report progress."""

        # single event loop thread, no lost increments
        self.scanned += 1
        notify(self.observer, "on_progress", self.progress)

    async def fan_out(
        self,
        items: Iterable[T],
        unit: Callable[[T], Awaitable[R]],
    ) -> list[R]:
        """Run ``unit`` for every item and return results in item order.

        Each unit counts towards progress exactly once, whether it returns or
        raises. The call returns or raises only after every unit has finished;
        if units raised, the first one in item order is re-raised.
        """

        async def run(item: T) -> R:
            try:
                return await unit(item)
            finally:
                self.advance()

        tasks = [asyncio.create_task(run(item)) for item in items]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        return list(outcomes)


__all__ = ["AdmissionGate", "ScanSession", "ip_sort_key"]
