"""Bounded-concurrency port and host discovery engine."""
from __future__ import annotations

from .events import (
    CallbackObserver,
    CompleteEvent,
    HostFoundEvent,
    ProgressEvent,
    QueueObserver,
    ScanEvent,
    ScanEventType,
    ScanObserver,
)
from .hosts import (
    DEFAULT_HOST_TIMEOUT,
    QUICK_PORTS,
    SubnetScanner,
    async_ping,
    async_probe_host,
    async_quick_port_scan,
    async_scan_hosts,
    async_stream_hosts,
    scan_hosts,
)
from .models import HostResult, PortScanResult, ScanProgress, ScanTarget, network_prefix
from .ports import (
    DEFAULT_CONCURRENCY,
    DEFAULT_PORT_TIMEOUT,
    PORT_NAMES,
    PortRangeScanner,
    async_probe_port,
    async_scan_ports,
    get_port_name,
    scan_ports,
)
from .session import AdmissionGate, ScanSession, ip_sort_key

__all__ = [
    "AdmissionGate",
    "CallbackObserver",
    "CompleteEvent",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_HOST_TIMEOUT",
    "DEFAULT_PORT_TIMEOUT",
    "HostFoundEvent",
    "HostResult",
    "PORT_NAMES",
    "PortRangeScanner",
    "PortScanResult",
    "ProgressEvent",
    "QUICK_PORTS",
    "QueueObserver",
    "ScanEvent",
    "ScanEventType",
    "ScanObserver",
    "ScanProgress",
    "ScanSession",
    "ScanTarget",
    "SubnetScanner",
    "async_ping",
    "async_probe_host",
    "async_probe_port",
    "async_quick_port_scan",
    "async_scan_hosts",
    "async_scan_ports",
    "async_stream_hosts",
    "get_port_name",
    "ip_sort_key",
    "network_prefix",
    "scan_hosts",
    "scan_ports",
]
