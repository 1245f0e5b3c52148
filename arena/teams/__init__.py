"""Team records and leaderboard."""

from .models import Team
from .services import TeamRepository

__all__ = ["Team", "TeamRepository"]
