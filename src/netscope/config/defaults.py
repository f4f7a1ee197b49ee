"""Default settings written to a fresh configuration file."""
from __future__ import annotations

from typing import Any, Dict

DEFAULT_SETTINGS: Dict[str, Any] = {
    "target": "192.168.1.100",
    "start_port": 1,
    "end_port": 100,
    "refresh_interval": 5,
    "timeout_ms": 100,
    "host_timeout_ms": 1000,
    "concurrency": 50,
    "subnet_start": 1,
    "subnet_end": 254,
}

__all__ = ["DEFAULT_SETTINGS"]
