"""Repository for team records."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

from arena.core.constants import TEAMS_ROOT
from arena.database.repository import EntityRepository
from arena.errors import StoreError
from arena.players.services import PlayerRepository
from arena.utils import name_sort_key

from .models import Team

if TYPE_CHECKING:
    from arena.database.allocator import IdentifierAllocator
    from arena.database.client import DocumentStoreClient
    from arena.players.models import Player

logger = logging.getLogger(__name__)


def leaderboard_key(team: Team) -> tuple:
    """Most wins first, then fewest matches played, then name."""
    return (-team.wins, team.total_matches, name_sort_key(team.name))


class TeamRepository(EntityRepository[Team]):
    """CRUD for ``teams/<id>`` with the roster attached at read time.

    The database cannot join, so every read fetches the players collection
    and keeps those whose ``teamId`` matches. A roster is therefore never
    staler than the read that produced it.
    """

    root = TEAMS_ROOT
    model = Team
    label = "team"

    def __init__(
        self,
        client: DocumentStoreClient,
        allocator: IdentifierAllocator | None = None,
        players: PlayerRepository | None = None,
    ) -> None:
        """Initialize the repository."""
        super().__init__(client, allocator)
        self.players = players or PlayerRepository(client, self.allocator)

    def attach_related(self, entity: Team) -> Team:
        """Attach the team's current roster."""
        entity.players = self.players.get_by_team(entity.id)
        return entity

    def get_all(self) -> list[Team]:
        """Fetch every team with its roster, using one scan of the players."""
        try:
            teams = self._scan()
        except StoreError as e:
            logger.error(f"Error getting all teams: {e}")
            return []

        rosters: dict[int, list[Player]] = defaultdict(list)
        for player in self.players.get_all():
            if player.team_id is not None:
                rosters[player.team_id].append(player)

        for team in teams:
            team.players = rosters.get(team.id, [])
        teams.sort(key=self.sort_key)
        return teams

    def get_leaderboard(self) -> list[Team]:
        """Return all teams in standings order, without rosters."""
        try:
            teams = self._scan()
        except StoreError as e:
            logger.error(f"Error getting leaderboard: {e}")
            return []
        teams.sort(key=leaderboard_key)
        return teams

    def update_leader(self, team_id: int, leader_id: int | None) -> bool:
        """Set the team's leader."""

        def apply(team: Team) -> None:
            team.leader_id = leader_id

        return self.modify(team_id, apply)

    def update_record(self, team_id: int, won: bool, draw: bool = False) -> bool:
        """Add one result to the team's win/loss/draw record."""

        def apply(team: Team) -> None:
            if draw:
                team.draws += 1
            elif won:
                team.wins += 1
            else:
                team.losses += 1

        return self.modify(team_id, apply)
