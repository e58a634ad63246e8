"""Snapshot persistence: the whole resource list in one storage slot.

Storage is a best-effort cache behind the in-memory store. Reads fall back
to the seed dataset; write failures are logged and never raised.
"""

import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from mindvault.errors import PersistenceReadError, PersistenceWriteError
from mindvault.models import Resource

from .seed import seed_resources

logger = logging.getLogger(__name__)

# Name of the single slot holding the serialized resource list
DEFAULT_SLOT = "mindvault_resources"

_resource_list = TypeAdapter(list[Resource])


def dump_resources(resources: list[Resource], indent: Optional[int] = None) -> str:
    """Serialize resources to a JSON array using snapshot field names."""
    return json.dumps(
        [r.to_snapshot() for r in resources], ensure_ascii=False, indent=indent
    )


def load_resources(text: str) -> list[Resource]:
    """Strictly parse a stored snapshot.

    Raises:
        PersistenceReadError: If the text is not a valid resource array.
    """
    try:
        return _resource_list.validate_json(text)
    except ValidationError as e:
        raise PersistenceReadError(f"Stored snapshot is malformed: {e}") from e


class SnapshotStorage(ABC):
    """Abstract single-slot storage for the resource list.

    Subclasses only move raw text in and out of the slot; loading,
    seeding, and error containment live here.
    """

    @abstractmethod
    def read_raw(self) -> Optional[str]:
        """Return the stored text, or None when the slot is empty."""
        ...

    @abstractmethod
    def write_raw(self, text: str) -> None:
        """Overwrite the slot with ``text``. May raise PersistenceWriteError."""
        ...

    def load(self) -> list[Resource]:
        """Read the stored snapshot, falling back to the seed dataset."""
        try:
            raw = self.read_raw()
            if raw is None:
                logger.info("No stored snapshot; starting from seed data")
                return seed_resources()
            return load_resources(raw)
        except (PersistenceReadError, sqlite3.Error, OSError) as e:
            logger.error("Failed to read stored resources, using seed data: %s", e)
            return seed_resources()

    def save(self, resources: list[Resource]) -> bool:
        """Overwrite the slot with ``resources``.

        Returns:
            True on success. Failures are logged, never raised.
        """
        try:
            self.write_raw(dump_resources(resources))
        except (PersistenceWriteError, sqlite3.Error, OSError, TypeError, ValueError) as e:
            logger.error("Failed to save %d resources: %s", len(resources), e)
            return False
        logger.debug("Saved %d resources", len(resources))
        return True


class SqliteSnapshotStorage(SnapshotStorage):
    """Key/value slot in the application SQLite file."""

    def __init__(self, db_path: Path, slot: str = DEFAULT_SLOT) -> None:
        self._path = Path(db_path)
        self._slot = slot

    def init_db(self) -> None:
        """Create the key/value table if it does not exist."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with sqlite3.connect(self._path) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at DATETIME NOT NULL
                )
                """
            )
            conn.commit()

    def read_raw(self) -> Optional[str]:
        if not self._path.exists():
            return None
        self.init_db()
        with sqlite3.connect(self._path) as conn:
            row = conn.execute(
                "SELECT value FROM kv WHERE key = ?", (self._slot,)
            ).fetchone()
        return row[0] if row else None

    def write_raw(self, text: str) -> None:
        self.init_db()
        with sqlite3.connect(self._path) as conn:
            conn.execute(
                """
                INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value, updated_at = excluded.updated_at
                """,
                (self._slot, text, datetime.now(timezone.utc).isoformat()),
            )
            conn.commit()

class MemorySnapshotStorage(SnapshotStorage):
    """In-process slot; nothing survives the process."""

    def __init__(self, initial: Optional[str] = None) -> None:
        self.value: Optional[str] = initial
        self.writes = 0

    def read_raw(self) -> Optional[str]:
        return self.value

    def write_raw(self, text: str) -> None:
        self.value = text
        self.writes += 1
