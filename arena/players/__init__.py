"""Player roster records."""

from .models import Player
from .services import PlayerRepository

__all__ = ["Player", "PlayerRepository"]
