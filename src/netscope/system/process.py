"""Blocking subprocess helper for the OS text-scraping collaborators."""
from __future__ import annotations

import logging
import subprocess
from typing import Sequence

logger = logging.getLogger(__name__)


def run_command(
    cmd: Sequence[str],
    timeout: float = 2.0,
    *,
    check: bool = False,
) -> str | None:
    """Run ``cmd`` and return its stdout.

    Returns ``None`` when the program is missing, times out, or (with
    ``check``) exits non-zero. Nothing is raised.
    """

    try:
        proc = subprocess.run(
            list(cmd),
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            stdin=subprocess.DEVNULL,
            timeout=timeout,
            check=False,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except subprocess.TimeoutExpired:
        logger.debug("Command timed out: %s", " ".join(cmd))
        return None
    except OSError as exc:
        logger.debug("Command failed to start: %s (%s)", " ".join(cmd), exc)
        return None
    if check and proc.returncode != 0:
        logger.debug("Command exited %s: %s", proc.returncode, " ".join(cmd))
        return None
    return proc.stdout


__all__ = ["run_command"]
