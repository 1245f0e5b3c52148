"""Tournament records and team registration."""

from .models import Tournament, TournamentStatus
from .services import TournamentRepository

__all__ = ["Tournament", "TournamentRepository", "TournamentStatus"]
