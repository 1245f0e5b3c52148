"""Generic CRUD repository over one collection root."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from arena.core.constants import FAILED_ID
from arena.errors import StoreError
from arena.utils import name_sort_key

from .allocator import IdentifierAllocator

if TYPE_CHECKING:
    from .client import DocumentStoreClient

logger = logging.getLogger(__name__)

M = TypeVar("M")


class EntityRepository(Generic[M]):
    """CRUD over ``<root>/<id>`` documents with a fail-soft public contract.

    Store failures never escape: they are logged and reported as ``-1`` from
    ``create``, ``None`` from lookups, an empty list from listings and
    ``False`` from writes. Updates are unconditional full-document
    replacements, so two writers of the same record race and the last PUT
    wins.
    """

    root: str = ""
    model: type[M]
    label: str = "entity"

    def __init__(
        self,
        client: DocumentStoreClient,
        allocator: IdentifierAllocator | None = None,
    ) -> None:
        """Initialize the repository."""
        self.client = client
        self.allocator = allocator or IdentifierAllocator(client)

    def path_for(self, entity_id: int) -> str:
        """Return the document path of a record."""
        return f"{self.root}/{entity_id}"

    @staticmethod
    def sort_key(entity: Any) -> Any:
        """Presentation order used by get_all."""
        return name_sort_key(getattr(entity, "name", None))

    def prepare(self, entity: M) -> None:
        """Hook to normalise entity in place before it is written."""

    def serialize(self, entity: M) -> dict[str, Any]:
        """Return the document written for entity."""
        return entity.to_dict()  # type: ignore[attr-defined]

    def decode(self, raw: Any) -> M:
        """Build a model instance from a stored document."""
        return self.model.from_dict(raw)  # type: ignore[attr-defined]

    def attach_related(self, entity: M) -> M:
        """Hook for read-time denormalization; the default does nothing."""
        return entity

    # ------------------------------------------------------------------

    def create(self, entity: M) -> int:
        """Allocate an id for entity, store it, and return the id (or -1)."""
        try:
            entity_id = self.allocator.allocate(self.root)
            self.prepare(entity)
            document = self.serialize(entity)
            document["id"] = entity_id
            self.client.write(self.path_for(entity_id), document)
        except StoreError as e:
            logger.error(f"Error creating {self.label}: {e}")
            return FAILED_ID
        entity.id = entity_id  # type: ignore[attr-defined]
        return entity_id

    def get_by_id(self, entity_id: int) -> M | None:
        """Fetch one record, or None when it is missing or unreadable."""
        try:
            entity = self.client.read(self.path_for(entity_id), self.decode)
        except StoreError as e:
            logger.error(f"Error getting {self.label} {entity_id}: {e}")
            return None
        if entity is None:
            return None
        return self.attach_related(entity)

    def _scan(self) -> list[M]:
        """Full collection scan without denormalization; raises StoreError."""
        collection = self.client.read_collection(self.root, self.decode)
        entities = []
        for key, entity in collection.items():
            if not getattr(entity, "id", None) and key.isdigit():
                entity.id = int(key)  # type: ignore[attr-defined]
            entities.append(entity)
        return entities

    def get_all(self) -> list[M]:
        """Fetch every record, sorted by the repository's natural key."""
        try:
            entities = self._scan()
        except StoreError as e:
            logger.error(f"Error getting all {self.root}: {e}")
            return []
        entities.sort(key=self.sort_key)
        return [self.attach_related(entity) for entity in entities]

    def find(self, predicate: Callable[[M], bool]) -> list[M]:
        """Return the records matching predicate, sorted like get_all.

        The database has no server-side filtering, so this is a full scan.
        """
        try:
            entities = [e for e in self._scan() if predicate(e)]
        except StoreError as e:
            logger.error(f"Error searching {self.root}: {e}")
            return []
        entities.sort(key=self.sort_key)
        return entities

    def update(self, entity: M) -> bool:
        """Overwrite the stored record with entity."""
        entity_id = entity.id  # type: ignore[attr-defined]
        if not entity_id or entity_id <= 0:
            logger.error(f"Cannot update {self.label} without an id.")
            return False
        self.prepare(entity)
        try:
            self.client.write(self.path_for(entity_id), self.serialize(entity))
        except StoreError as e:
            logger.error(f"Error updating {self.label} {entity_id}: {e}")
            return False
        return True

    def delete(self, entity_id: int) -> bool:
        """Remove a record; related copies elsewhere are left untouched."""
        try:
            self.client.delete(self.path_for(entity_id))
        except StoreError as e:
            logger.error(f"Error deleting {self.label} {entity_id}: {e}")
            return False
        return True

    def modify(self, entity_id: int, change: Callable[[M], Any]) -> bool:
        """Read-modify-write one record; unguarded against concurrent writers."""
        try:
            entity = self.client.read(self.path_for(entity_id), self.decode)
        except StoreError as e:
            logger.error(f"Error getting {self.label} {entity_id}: {e}")
            return False
        if entity is None:
            return False
        change(entity)
        return self.update(entity)
