"""Repository for player records."""

from __future__ import annotations

import logging
from typing import Any

from arena.auth import hash_password, verify_password
from arena.core.constants import PLAYERS_ROOT
from arena.database.repository import EntityRepository
from arena.utils import name_sort_key

from .models import Player

logger = logging.getLogger(__name__)


class PlayerRepository(EntityRepository[Player]):
    """CRUD and roster queries for ``players/<id>``."""

    root = PLAYERS_ROOT
    model = Player
    label = "player"

    @staticmethod
    def sort_key(entity: Any) -> Any:
        """Order players by username."""
        return name_sort_key(entity.username)

    def prepare(self, entity: Player) -> None:
        """Hash the password on the entity so it matches what is stored."""
        entity.password = hash_password(entity.password)

    def get_by_username(self, username: str) -> Player | None:
        """Return the player with this username, matched exactly."""
        matches = self.find(lambda p: p.username == username)
        return matches[0] if matches else None

    def get_by_team(self, team_id: int) -> list[Player]:
        """Return the current roster of a team."""
        return self.find(lambda p: p.team_id == team_id)

    def get_available_by_team(self, team_id: int) -> list[Player]:
        """Return the roster members that are marked available."""
        return self.find(lambda p: p.team_id == team_id and p.available)

    def update_stats(  # noqa: PLR0913
        self,
        player_id: int,
        kills: int,
        deaths: int,
        assists: int,
        won: bool,
    ) -> bool:
        """Add one match's figures to a player's career totals."""

        def apply(player: Player) -> None:
            player.total_kills += kills
            player.total_deaths += deaths
            player.total_assists += assists
            player.matches_played += 1
            if won:
                player.matches_won += 1

        return self.modify(player_id, apply)

    def update_availability(
        self, player_id: int, available: bool, reason: str | None = None
    ) -> bool:
        """Mark a player as available or not, with an optional reason."""

        def apply(player: Player) -> None:
            player.available = available
            player.availability_reason = reason

        return self.modify(player_id, apply)

    def authenticate(self, username: str, password: str) -> Player | None:
        """Return the player if the credentials match, otherwise None."""
        player = self.get_by_username(username)
        if player is not None and verify_password(player.password, password):
            return player
        logger.info(f"Failed login for player {username!r}.")
        return None
