"""Persistence layer - single-slot snapshot storage."""

from .seed import seed_resources
from .snapshot import (
    DEFAULT_SLOT,
    MemorySnapshotStorage,
    SnapshotStorage,
    SqliteSnapshotStorage,
    dump_resources,
    load_resources,
)

__all__ = [
    "DEFAULT_SLOT",
    "MemorySnapshotStorage",
    "SnapshotStorage",
    "SqliteSnapshotStorage",
    "dump_resources",
    "load_resources",
    "seed_resources",
]
