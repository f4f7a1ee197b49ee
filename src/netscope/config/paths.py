"""Filesystem helpers for configuration storage."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ConfigPaths:
    """Resolved filesystem locations for configuration data."""

    root: Path
    config_file: Path

    @classmethod
    def create(cls, root: Path | None = None) -> "ConfigPaths":
        """Return paths rooted at *root*, ``NETSCOPE_HOME`` or ``~/.netscope``."""

        if root is None:
            env_root = os.environ.get("NETSCOPE_HOME")
            root = Path(env_root) if env_root else Path.home() / ".netscope"
        base = Path(root).expanduser().resolve()
        return cls(root=base, config_file=base / "config.json")

    def ensure(self) -> None:
        """Create the configuration directory if needed."""

        self.root.mkdir(parents=True, exist_ok=True)


__all__ = ["ConfigPaths"]
