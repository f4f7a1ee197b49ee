"""Exception types raised outside the probe boundary."""
from __future__ import annotations


class NetscopeError(RuntimeError):
    """Base class for netscope errors."""


class TargetError(NetscopeError, ValueError):
    """Raised when user input cannot be turned into a scan target."""


class ConfigError(NetscopeError):
    """Raised when a settings value has the wrong type."""


__all__ = ["ConfigError", "NetscopeError", "TargetError"]
