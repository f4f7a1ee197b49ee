"""Observer interface and event messages emitted by the scanners."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Mapping, TypeVar

from .models import HostResult, ScanProgress

logger = logging.getLogger(__name__)

R = TypeVar("R")


class ScanEventType(str, Enum):
    """Kinds of messages a scan produces."""

    PROGRESS = "progress"
    HOST_FOUND = "host_found"
    COMPLETE = "complete"


@dataclass(slots=True)
class ScanEvent:
    """Base scan event payload."""

    type: ScanEventType
    payload: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "payload": dict(self.payload)}


class ProgressEvent(ScanEvent):
    """One more unit finished."""

    __slots__ = ("progress",)

    def __init__(self, progress: ScanProgress) -> None:
        super().__init__(
            ScanEventType.PROGRESS,
            {"scanned": progress.scanned, "total": progress.total},
        )
        self.progress = progress


class HostFoundEvent(ScanEvent):
    """A live host was confirmed."""

    __slots__ = ("host",)

    def __init__(self, host: HostResult) -> None:
        super().__init__(ScanEventType.HOST_FOUND, host.as_dict())
        self.host = host


class CompleteEvent(ScanEvent):
    """Every unit joined; ``result`` is the final ordered result."""

    __slots__ = ("result",)

    def __init__(self, result: Any) -> None:
        payload = result.as_dict() if hasattr(result, "as_dict") else {
            "hosts": [h.as_dict() for h in result]
        }
        super().__init__(ScanEventType.COMPLETE, payload)
        self.result = result


class ScanObserver(Generic[R]):
    """Receives scan messages. Every hook defaults to a no-op."""

    def on_progress(self, progress: ScanProgress) -> None:
        pass

    def on_host_found(self, host: HostResult) -> None:
        pass

    def on_complete(self, result: R) -> None:
        pass


class CallbackObserver(ScanObserver[R]):
    """Adapt plain callables to :class:`ScanObserver`."""

    def __init__(
        self,
        progress: Callable[[int, int], None] | None = None,
        host_found: Callable[[HostResult], None] | None = None,
        complete: Callable[[R], None] | None = None,
    ) -> None:
        self._progress = progress
        self._host_found = host_found
        self._complete = complete

    def on_progress(self, progress: ScanProgress) -> None:
        if self._progress is not None:
            self._progress(progress.scanned, progress.total)

    def on_host_found(self, host: HostResult) -> None:
        if self._host_found is not None:
            self._host_found(host)

    def on_complete(self, result: R) -> None:
        if self._complete is not None:
            self._complete(result)


class QueueObserver(ScanObserver[Any]):
    """Push every message onto an :class:`asyncio.Queue`."""

    def __init__(self, queue: asyncio.Queue[ScanEvent] | None = None) -> None:
        self.queue: asyncio.Queue[ScanEvent] = queue or asyncio.Queue()

    def on_progress(self, progress: ScanProgress) -> None:
        self.queue.put_nowait(ProgressEvent(progress))

    def on_host_found(self, host: HostResult) -> None:
        self.queue.put_nowait(HostFoundEvent(host))

    def on_complete(self, result: Any) -> None:
        self.queue.put_nowait(CompleteEvent(result))


def notify(observer: ScanObserver | None, hook: str, *args: Any) -> None:
    """Call ``observer.<hook>(*args)`` without letting consumer errors escape."""

    if observer is None:
        return
    try:
        getattr(observer, hook)(*args)
    except Exception:
        logger.exception("Scan observer %s failed", hook)


__all__ = [
    "CallbackObserver",
    "CompleteEvent",
    "HostFoundEvent",
    "ProgressEvent",
    "QueueObserver",
    "ScanEvent",
    "ScanEventType",
    "ScanObserver",
    "notify",
]
