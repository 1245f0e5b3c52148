"""Per-entity-type integer id allocation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from arena.core.constants import COUNTERS_ROOT

if TYPE_CHECKING:
    from .client import DocumentStoreClient


class IdentifierAllocator:
    """Hands out strictly increasing ids from ``counters/<entity_type>``.

    Uniqueness holds only as long as the database honours ``If-Match``; the
    allocator adds nothing on top of the client's bounded retry.
    """

    def __init__(self, client: DocumentStoreClient) -> None:
        """Initialize the allocator."""
        self.client = client

    @staticmethod
    def counter_path(entity_type: str) -> str:
        """Return the document path of an entity type's counter."""
        return f"{COUNTERS_ROOT}/{entity_type}"

    def allocate(self, entity_type: str) -> int:
        """Reserve the next id for entity_type."""
        return self.client.next_id(self.counter_path(entity_type))
