"""Team leader elections."""

from .models import LeaderVote
from .services import VotingLedger

__all__ = ["LeaderVote", "VotingLedger"]
