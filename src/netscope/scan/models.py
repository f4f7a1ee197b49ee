"""Value types shared by the port and subnet scanners."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, NamedTuple

from netscope.errors import TargetError

MIN_PORT = 1
MAX_PORT = 65535
MIN_HOST = 1
MAX_HOST = 254


def network_prefix(address: str) -> str:
    """Return the first three octets of ``address``.

    ``192.168.1.100`` becomes ``192.168.1``. Inputs that are not four dotted
    parts are returned unchanged so a bare prefix passes straight through.
    """

    parts = address.strip().rstrip(".").split(".")
    if len(parts) != 4:
        return address.strip().rstrip(".")
    return ".".join(parts[:3])


def _clamp_range(start: int, end: int, low: int, high: int) -> tuple[int, int]:
    start = max(start, low)
    end = min(end, high)
    if start > end:
        start, end = end, start
    return start, end


@dataclass(frozen=True)
class ScanTarget:
    """Address plus an inclusive ``[start, end]`` range.

    The scanners trust the target they are given. Use :meth:`for_ports` or
    :meth:`for_subnet` to build a normalized one from user input.
    """

    address: str
    start: int
    end: int

    @classmethod
    def for_ports(cls, host: str, start: int, end: int) -> "ScanTarget":
        """Return a port target with the range clamped to 1-65535."""

        host = host.strip()
        if not host:
            raise TargetError("Empty target host")
        start, end = _clamp_range(start, end, MIN_PORT, MAX_PORT)
        return cls(host, start, end)

    @classmethod
    def for_subnet(cls, address: str, start: int, end: int) -> "ScanTarget":
        """Return a subnet target on the /24 prefix of ``address``."""

        prefix = network_prefix(address)
        octets = prefix.split(".")
        if len(octets) != 3 or not all(o.isdigit() and int(o) <= 255 for o in octets):
            raise TargetError(f"Invalid network prefix: {address}")
        start, end = _clamp_range(start, end, MIN_HOST, MAX_HOST)
        return cls(prefix, start, end)

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))


class ScanProgress(NamedTuple):
    """``scanned`` out of ``total`` units finished."""

    scanned: int
    total: int

    @property
    def fraction(self) -> float:
        return self.scanned / self.total if self.total else 1.0

    @property
    def done(self) -> bool:
        return self.scanned >= self.total


class PortScanResult(Mapping[int, bool]):
    """Read-only ``port -> open`` mapping ordered by port number."""

    __slots__ = ("host", "_ports")

    def __init__(self, host: str, items: Iterable[tuple[int, bool]]) -> None:
        self.host = host
        ports: Dict[int, bool] = {}
        for port, is_open in items:
            # first write wins, a key is never overwritten
            ports.setdefault(int(port), bool(is_open))
        self._ports = {p: ports[p] for p in sorted(ports)}

    def __getitem__(self, port: int) -> bool:
        return self._ports[port]

    def __iter__(self) -> Iterator[int]:
        return iter(self._ports)

    def __len__(self) -> int:
        return len(self._ports)

    def __repr__(self) -> str:
        return f"PortScanResult(host={self.host!r}, open={self.open_ports!r}, total={len(self)})"

    @property
    def open_ports(self) -> list[int]:
        return [p for p, is_open in self._ports.items() if is_open]

    def as_dict(self) -> Dict[str, Any]:
        return {"host": self.host, "scanned": len(self), "open_ports": self.open_ports}


@dataclass
class HostResult:
    """A host that answered the ICMP echo."""

    ip: str
    hostname: str | None = None
    mac: str | None = None
    alive: bool = True
    response_time: float = 0.0
    open_ports: tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        self.open_ports = tuple(sorted(set(int(p) for p in self.open_ports)))

    def ports_display(self) -> str:
        """Return open ports as ``22(SSH),80(HTTP),5000``."""

        from .ports import get_port_name

        items = []
        for port in self.open_ports:
            name = get_port_name(port)
            items.append(f"{port}({name})" if name else str(port))
        return ",".join(items)

    def as_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "ip": self.ip,
            "alive": self.alive,
            "response_time": self.response_time,
            "ports": list(self.open_ports),
        }
        if self.hostname is not None:
            result["hostname"] = self.hostname
        if self.mac is not None:
            result["mac"] = self.mac
        return result


__all__ = [
    "HostResult",
    "MAX_HOST",
    "MAX_PORT",
    "MIN_HOST",
    "MIN_PORT",
    "PortScanResult",
    "ScanProgress",
    "ScanTarget",
    "network_prefix",
]
