"""Match records and per-player match statistics."""

from .models import Match, MatchStatus, PlayerMatchStats
from .services import MatchRepository

__all__ = ["Match", "MatchRepository", "MatchStatus", "PlayerMatchStats"]
