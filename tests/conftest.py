"""Global fixtures: temp DB, in-memory snapshot storage, sample resources."""

import tempfile
from pathlib import Path

import pytest

from mindvault.core.store import ResourceStore
from mindvault.database.snapshot import MemorySnapshotStorage
from mindvault.models import Resource


@pytest.fixture
def temp_db_path() -> Path:
    """Temporary SQLite path (cleaned up after test)."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    yield path
    if path.exists():
        path.unlink(missing_ok=True)


@pytest.fixture
def memory_storage() -> MemorySnapshotStorage:
    """Empty in-memory snapshot slot."""
    return MemorySnapshotStorage()


@pytest.fixture
def seeded_store(memory_storage: MemorySnapshotStorage) -> ResourceStore:
    """Store opened on an empty slot, so it holds the seed dataset."""
    return ResourceStore.open(memory_storage)


@pytest.fixture
def empty_store(memory_storage: MemorySnapshotStorage) -> ResourceStore:
    """Store with no resources."""
    return ResourceStore(memory_storage)


@pytest.fixture
def sample_resource() -> Resource:
    """Single fully-specified resource for tests."""
    return Resource(
        id="res-1",
        title="Designing Data-Intensive Applications",
        url="https://dataintensive.net",
        type="ARTICLE",
        platform="O'Reilly",
        summary="Storage engines, replication and stream processing.",
        user_notes="Chapter 3 is the one on LSM trees.",
        tags=["databases", "distributed-systems"],
        created_at=1_700_000_000_000,
        content_raw="",
    )
