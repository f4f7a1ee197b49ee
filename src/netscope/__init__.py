"""Public package interface for netscope."""
from __future__ import annotations

__version__ = "0.4.0"

from .scan import (
    HostResult,
    PortRangeScanner,
    PortScanResult,
    ScanObserver,
    ScanProgress,
    ScanTarget,
    SubnetScanner,
    async_scan_hosts,
    async_scan_ports,
    scan_hosts,
    scan_ports,
)

__all__ = [
    "HostResult",
    "PortRangeScanner",
    "PortScanResult",
    "ScanObserver",
    "ScanProgress",
    "ScanTarget",
    "SubnetScanner",
    "__version__",
    "async_scan_hosts",
    "async_scan_ports",
    "scan_hosts",
    "scan_ports",
]
