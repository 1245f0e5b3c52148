"""Per-tournament statistics."""

from .services import TournamentStatsService

__all__ = ["TournamentStatsService"]
