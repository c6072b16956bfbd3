"""Snapshots of system memory state."""

from __future__ import annotations

import sys
from dataclasses import dataclass

import psutil

_MIB = 1024 * 1024


@dataclass(frozen=True)
class Snapshot:
    """System memory metrics at a point in time."""

    available_ram_mb: int = 0
    page_faults: int = 0


def capture() -> Snapshot:
    """Take a snapshot of memory state; empty on platforms other than Windows."""
    if sys.platform != "win32":
        return Snapshot()

    available_ram_mb = 0
    try:
        available_ram_mb = int(psutil.virtual_memory().available) // _MIB
    except (psutil.Error, OSError):
        pass

    page_faults = 0
    try:
        page_faults = int(psutil.Process().memory_info().num_page_faults)
    except (psutil.Error, OSError, AttributeError):
        pass

    return Snapshot(available_ram_mb=available_ram_mb, page_faults=page_faults)