"""In-memory resource store with persistence as a post-mutation hook."""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from mindvault.database.snapshot import SnapshotStorage
from mindvault.models import Resource

from .normalize import normalize_resource

logger = logging.getLogger(__name__)


class ResourceStore:
    """Sole owner of the saved resource list.

    Resources are kept newest-inserted-first. Every mutating operation
    writes the full list through the injected storage afterwards; a failed
    write leaves the in-memory list authoritative.
    """

    def __init__(
        self,
        storage: SnapshotStorage,
        resources: Optional[Iterable[Resource]] = None,
    ) -> None:
        self._storage = storage
        self._resources: list[Resource] = list(resources or [])

    @classmethod
    def open(cls, storage: SnapshotStorage) -> "ResourceStore":
        """Load the stored snapshot (or seed data) into a new store."""
        return cls(storage, storage.load())

    def _persist(self) -> None:
        self._storage.save(self._resources)

    def list(self) -> list[Resource]:
        """Return the current resources, newest-inserted-first (a copy)."""
        return list(self._resources)

    def get(self, resource_id: str) -> Optional[Resource]:
        """Get a resource by ID."""
        for resource in self._resources:
            if resource.id == resource_id:
                return resource
        return None

    def __len__(self) -> int:
        return len(self._resources)

    def add(self, partial: Optional[Mapping[str, Any]] = None, **fields: Any) -> Resource:
        """Add a new resource built from a partial descriptor.

        Missing fields get their defaults; ``id`` and ``created_at`` are always
        freshly generated.

        Args:
            partial: Mapping of resource fields (snake_case or camelCase).
            **fields: Additional fields, overriding ``partial``.

        Returns:
            The stored resource.
        """
        data = {**(partial or {}), **fields}
        resource = normalize_resource(data)
        self._resources.insert(0, resource)
        logger.info("Added resource %s (%s)", resource.id, resource.type)
        self._persist()
        return resource

    def delete(self, resource_id: str) -> bool:
        """Delete a resource by ID. Unknown IDs are a no-op.

        Returns:
            True if a resource was removed.
        """
        before = len(self._resources)
        self._resources = [r for r in self._resources if r.id != resource_id]
        removed = len(self._resources) != before
        if removed:
            logger.info("Deleted resource %s", resource_id)
        self._persist()
        return removed

    def update_notes(self, resource_id: str, notes: str) -> Optional[Resource]:
        """Replace the user notes of a resource, leaving other fields untouched.

        Returns:
            The updated resource, or None if the ID is unknown.
        """
        updated: Optional[Resource] = None
        for i, resource in enumerate(self._resources):
            if resource.id == resource_id:
                updated = resource.model_copy(update={"user_notes": notes})
                self._resources[i] = updated
                break
        self._persist()
        return updated

    def replace_all(self, resources: Iterable[Resource]) -> None:
        """Discard the current list and replace it wholesale.

        Callers are responsible for normalizing ``resources`` first.
        """
        self._resources = list(resources)
        logger.info("Replaced store contents with %d resources", len(self._resources))
        self._persist()
