"""Access to the realtime database."""

from .allocator import IdentifierAllocator
from .client import DocumentStoreClient
from .repository import EntityRepository

__all__ = ["DocumentStoreClient", "EntityRepository", "IdentifierAllocator"]
