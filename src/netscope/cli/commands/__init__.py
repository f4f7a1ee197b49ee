"""Concrete command implementations for the netscope CLI."""
from __future__ import annotations

from importlib import import_module
from types import ModuleType
from typing import TYPE_CHECKING, Any

__all__ = [
    "host_scan",
    "info",
    "port_scan",
    "watch",
    "wifi_scan",
    "load",
    "COMMAND_ORDER",
]

# Order in which commands appear in ``--help``.
COMMAND_ORDER = ("port_scan", "host_scan", "watch", "wifi_scan", "info")
_COMMAND_NAMES = set(COMMAND_ORDER)

if TYPE_CHECKING:
    from . import host_scan as host_scan
    from . import info as info
    from . import port_scan as port_scan
    from . import watch as watch
    from . import wifi_scan as wifi_scan


def load(name: str) -> ModuleType:
    """Dynamically import a command module by *name*."""

    if name not in _COMMAND_NAMES:
        raise ValueError(f"Unknown command: {name}")
    return import_module(f"{__name__}.{name}")


def __getattr__(name: str) -> Any:
    if name in _COMMAND_NAMES:
        module = import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(set(__all__) | set(globals()) | _COMMAND_NAMES)
