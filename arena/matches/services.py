"""Repository for match records."""

from __future__ import annotations

import datetime
import logging
from typing import Any

from arena.core.constants import MATCHES_ROOT, PLAYER_MATCH_STATS_COUNTER
from arena.database.repository import EntityRepository
from arena.errors import StoreError

from .models import Match, MatchStatus, PlayerMatchStats

logger = logging.getLogger(__name__)


class MatchRepository(EntityRepository[Match]):
    """CRUD for ``matches/<id>`` plus the match lifecycle transitions."""

    root = MATCHES_ROOT
    model = Match
    label = "match"

    @staticmethod
    def sort_key(entity: Any) -> Any:
        """Order matches by scheduled time, unscheduled last."""
        return (
            entity.scheduled_time is None,
            entity.scheduled_time or datetime.datetime.min,
            entity.id,
        )

    def get_by_tournament(self, tournament_id: int) -> list[Match]:
        """Return a tournament's matches in schedule order."""
        return self.find(lambda m: m.tournament_id == tournament_id)

    def get_by_status(self, status: MatchStatus | str) -> list[Match]:
        """Return matches in the given state in schedule order."""
        wanted = MatchStatus(status)
        return self.find(lambda m: m.status == wanted)

    def get_by_team(self, team_id: int) -> list[Match]:
        """Return every match a team plays in."""
        return self.find(lambda m: m.involves(team_id))

    def start_match(self, match_id: int) -> bool:
        """Mark a match live."""
        return self.modify(match_id, lambda m: m.start())

    def end_match(self, match_id: int, winner_id: int | None) -> bool:
        """Mark a match completed with the given winner (None for a draw)."""
        return self.modify(match_id, lambda m: m.end(winner_id))

    def add_player_stats(self, match_id: int, stats: PlayerMatchStats) -> bool:
        """Append a player's figures to a match.

        The stats record gets its own id from the ``player_match_stats``
        counter; the match document is then rewritten whole.
        """
        try:
            stats_id = self.allocator.allocate(PLAYER_MATCH_STATS_COUNTER)
        except StoreError as e:
            logger.error(f"Error adding player stats to match {match_id}: {e}")
            return False

        def apply(match: Match) -> None:
            stats.id = stats_id
            stats.match_id = match_id
            match.player_stats.append(stats)

        return self.modify(match_id, apply)

    def get_player_stats_by_match(self, match_id: int) -> list[PlayerMatchStats]:
        """Return the per-player figures recorded for a match."""
        match = self.get_by_id(match_id)
        return match.player_stats if match else []

    def get_player_stats_by_player(self, player_id: int) -> list[PlayerMatchStats]:
        """Return every match's figures for one player."""
        return [
            stats
            for match in self.get_all()
            for stats in match.player_stats
            if stats.player_id == player_id
        ]
