"""Thin wrappers around operating system facilities.

Nothing in this package is part of the scan engine's concurrency model;
each call is a single blocking lookup with its own timeout.
"""
from __future__ import annotations

__all__ = ["dhcp", "interfaces", "neighbors", "process", "wifi"]
