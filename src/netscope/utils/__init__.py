"""Shared helpers for netscope."""
from __future__ import annotations

from .logging_config import setup_logging

__all__ = ["setup_logging"]
