"""Repository for organizer accounts."""

from __future__ import annotations

import datetime
import logging
from typing import Any

from arena.auth import hash_password, verify_password
from arena.core.constants import ORGANIZERS_ROOT
from arena.database.repository import EntityRepository
from arena.utils import name_sort_key

from .models import Organizer

logger = logging.getLogger(__name__)


class OrganizerRepository(EntityRepository[Organizer]):
    """CRUD and login for ``organizers/<id>``."""

    root = ORGANIZERS_ROOT
    model = Organizer
    label = "organizer"

    @staticmethod
    def sort_key(entity: Any) -> Any:
        """Order organizers by username."""
        return name_sort_key(entity.username)

    def prepare(self, entity: Organizer) -> None:
        """Hash the password on the entity so it matches what is stored."""
        entity.password = hash_password(entity.password)

    def create(self, entity: Organizer) -> int:
        """Create an organizer, stamping the creation time."""
        if not entity.created_date:
            entity.created_date = datetime.datetime.now().isoformat(timespec="seconds")
        return super().create(entity)

    def get_by_username(self, username: str) -> Organizer | None:
        """Return the organizer with this username, matched exactly."""
        matches = self.find(lambda o: o.username == username)
        return matches[0] if matches else None

    def authenticate(self, username: str, password: str) -> Organizer | None:
        """Return the organizer if the credentials match, otherwise None."""
        organizer = self.get_by_username(username)
        if organizer is not None and verify_password(organizer.password, password):
            return organizer
        logger.info(f"Failed login for organizer {username!r}.")
        return None
