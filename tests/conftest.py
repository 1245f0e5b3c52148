"""Common utilities for tests."""

from typing import Any, Optional

from arena.database.client import DocumentStoreClient
from arena.extensions import Repositories
from tests.mock_utils import BASE_URL, MockRealtimeDatabase


def make_client(
    fake: Optional[MockRealtimeDatabase] = None, **kwargs: Any
) -> DocumentStoreClient:
    """Return a client talking to fake (a fresh one by default)."""
    kwargs.setdefault("retry_delay", 0)
    return DocumentStoreClient(
        BASE_URL, session=fake if fake is not None else MockRealtimeDatabase(), **kwargs
    )


def make_repositories(
    data: Optional[dict[str, Any]] = None, **kwargs: Any
) -> tuple[Repositories, MockRealtimeDatabase]:
    """Return every repository wired to a fake database seeded with data."""
    fake = MockRealtimeDatabase(data)
    return Repositories(make_client(fake, **kwargs)), fake
