"""Repository for tournament records."""

from __future__ import annotations

import datetime
import logging
from typing import TYPE_CHECKING, Any

from arena.core.constants import TOURNAMENTS_ROOT
from arena.database.repository import EntityRepository
from arena.errors import StoreError
from arena.teams.services import TeamRepository

from .models import Tournament, TournamentStatus

if TYPE_CHECKING:
    from arena.database.allocator import IdentifierAllocator
    from arena.database.client import DocumentStoreClient
    from arena.teams.models import Team

logger = logging.getLogger(__name__)


def _start_date_key(tournament: Tournament) -> tuple[bool, datetime.date]:
    return (tournament.start_date is None, tournament.start_date or datetime.date.min)


class TournamentRepository(EntityRepository[Tournament]):
    """CRUD for ``tournaments/<id>`` plus team registration."""

    root = TOURNAMENTS_ROOT
    model = Tournament
    label = "tournament"

    def __init__(
        self,
        client: DocumentStoreClient,
        allocator: IdentifierAllocator | None = None,
        teams: TeamRepository | None = None,
    ) -> None:
        """Initialize the repository."""
        super().__init__(client, allocator)
        self.teams = teams or TeamRepository(client, self.allocator)

    @staticmethod
    def sort_key(entity: Any) -> Any:
        """Latest start date first, undated tournaments last."""
        return (
            entity.start_date is None,
            -(entity.start_date or datetime.date.min).toordinal(),
        )

    def _fetch_team(self, team_id: int) -> Team | None:
        """Read one team document without its roster; raises StoreError."""
        return self.client.read(self.teams.path_for(team_id), self.teams.decode)

    def attach_related(self, entity: Tournament) -> Tournament:
        """Replace each stored team snapshot with the current team record.

        Teams deleted since registration are dropped. If a team cannot be
        read, its stored snapshot is kept.
        """
        refreshed = []
        for snapshot in entity.registered_teams:
            try:
                current = self._fetch_team(snapshot.id)
            except StoreError as e:
                logger.warning(f"Using cached copy of team {snapshot.id}: {e}")
                refreshed.append(snapshot)
                continue
            if current is not None:
                refreshed.append(current)
        entity.registered_teams = refreshed
        return entity

    def get_registered_teams(self, tournament_id: int) -> list[Team]:
        """Return the current records of a tournament's registered teams."""
        tournament = self.get_by_id(tournament_id)
        return tournament.registered_teams if tournament else []

    def get_by_status(self, status: TournamentStatus | str) -> list[Tournament]:
        """Return tournaments in the given state, earliest start first."""
        wanted = TournamentStatus(status)
        tournaments = self.find(lambda t: t.status == wanted)
        tournaments.sort(key=_start_date_key)
        return tournaments

    def register_team(self, tournament_id: int, team_id: int) -> bool:
        """Add a team to a tournament's registrations.

        Refuses unknown teams, duplicate registrations and full tournaments.
        The tournament document is rewritten whole, so concurrent
        registrations for the same tournament can overwrite each other.
        """
        try:
            tournament = self.client.read(self.path_for(tournament_id), self.decode)
            team = self._fetch_team(team_id)
        except StoreError as e:
            logger.error(f"Error registering team {team_id}: {e}")
            return False

        if tournament is None or team is None:
            logger.warning(
                f"Cannot register team {team_id} for tournament {tournament_id}: "
                "not found."
            )
            return False
        if team_id in tournament.registered_team_ids:
            logger.warning(f"Team {team_id} already registered for {tournament_id}.")
            return False
        if tournament.is_full:
            logger.warning(f"Tournament {tournament_id} is full.")
            return False

        tournament.registered_teams.append(team)
        return self.update(tournament)
