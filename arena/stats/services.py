"""Service for per-tournament team and player statistics."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from arena.matches.models import Match
    from arena.matches.services import MatchRepository
    from arena.players.services import PlayerRepository


@dataclass
class TeamTournamentStats:
    """A team's record within one tournament."""

    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def matches_played(self) -> int:
        """Completed matches counted in the record."""
        return self.wins + self.losses + self.draws

    def to_dict(self) -> dict[str, Any]:
        """Return the record with matches_played included."""
        return {**asdict(self), "matches_played": self.matches_played}


@dataclass
class PlayerTournamentStats:
    """A player's totals within one tournament."""

    kills: int = 0
    deaths: int = 0
    assists: int = 0
    matches_played: int = 0
    matches_won: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the totals as a plain dict."""
        return asdict(self)


class TournamentStatsService:
    """Aggregates match results for one tournament."""

    def __init__(self, matches: MatchRepository, players: PlayerRepository) -> None:
        """Initialize the service."""
        self.matches = matches
        self.players = players

    def get_team_tournament_stats(
        self, team_id: int, tournament_id: int
    ) -> TeamTournamentStats:
        """Count a team's completed results; no winner means a draw."""
        stats = TeamTournamentStats()
        for match in self.matches.get_by_tournament(tournament_id):
            if not match.involves(team_id) or not match.is_completed:
                continue
            if match.winner_id is None:
                stats.draws += 1
            elif match.winner_id == team_id:
                stats.wins += 1
            else:
                stats.losses += 1
        return stats

    def get_player_tournament_stats(
        self, player_id: int, tournament_id: int
    ) -> PlayerTournamentStats:
        """Sum a player's per-match figures across a tournament.

        A match counts as won when the player's current team is the winner.
        """
        player = self.players.get_by_id(player_id)
        team_id = player.team_id if player else None
        matches = self.matches.get_by_tournament(tournament_id)
        return _sum_player_stats(matches, player_id, team_id)

    def get_all_players_tournament_stats(
        self, tournament_id: int
    ) -> dict[int, PlayerTournamentStats]:
        """Return every player's totals for a tournament, keyed by player id."""
        matches = self.matches.get_by_tournament(tournament_id)
        return {
            player.id: _sum_player_stats(matches, player.id, player.team_id)
            for player in self.players.get_all()
        }


def _sum_player_stats(
    matches: list[Match], player_id: int, team_id: int | None
) -> PlayerTournamentStats:
    stats = PlayerTournamentStats()
    for match in matches:
        entry = next((s for s in match.player_stats if s.player_id == player_id), None)
        if entry is None:
            continue
        stats.kills += entry.kills
        stats.deaths += entry.deaths
        stats.assists += entry.assists
        stats.matches_played += 1
        if team_id is not None and match.winner_id == team_id:
            stats.matches_won += 1
    return stats
