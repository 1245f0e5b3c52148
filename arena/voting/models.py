"""Data models for leader votes."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any

from arena.utils import parse_datetime


@dataclass
class LeaderVote:
    """One ballot in a team's vote list."""

    team_id: int
    voter_id: int
    candidate_id: int
    vote_time: datetime.datetime = field(default_factory=datetime.datetime.now)
    active: bool = True
    id: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LeaderVote:
        """Build a vote from its stored form."""
        return cls(
            id=int(data.get("id") or 0),
            team_id=int(data["teamId"]),
            voter_id=int(data["voterId"]),
            candidate_id=int(data["candidateId"]),
            vote_time=parse_datetime(data.get("voteTime")) or datetime.datetime.min,
            active=bool(data.get("active", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the stored form of this vote."""
        return {
            "id": self.id,
            "teamId": self.team_id,
            "voterId": self.voter_id,
            "candidateId": self.candidate_id,
            "voteTime": self.vote_time.isoformat(),
            "active": self.active,
        }
