"""Data models for tournaments."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from arena.teams.models import Team
from arena.utils import dict_values, iso, parse_date


class TournamentStatus(str, Enum):
    """Lifecycle states of a tournament."""

    UPCOMING = "UPCOMING"
    REGISTRATION_OPEN = "REGISTRATION_OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


@dataclass
class Tournament:
    """A tournament document in the realtime database.

    ``registered_teams`` is stored as a list of team snapshots taken at
    registration time; reads replace each snapshot with the current record.
    """

    name: Optional[str] = None
    game: Optional[str] = None
    format: Optional[str] = None
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    prize_pool: float = 0.0
    status: TournamentStatus = TournamentStatus.UPCOMING
    max_teams: int = 0
    registered_teams: list[Team] = field(default_factory=list)
    id: int = 0

    @property
    def registered_team_ids(self) -> list[int]:
        """Ids of the registered teams, in registration order."""
        return [team.id for team in self.registered_teams]

    @property
    def is_full(self) -> bool:
        """True when max_teams is set and reached."""
        return 0 < self.max_teams <= len(self.registered_teams)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tournament:
        """Build a tournament from its stored document."""
        return cls(
            id=int(data.get("id") or 0),
            name=data.get("name"),
            game=data.get("game"),
            format=data.get("format"),
            start_date=parse_date(data.get("startDate")),
            end_date=parse_date(data.get("endDate")),
            prize_pool=float(data.get("prizePool", 0.0)),
            status=TournamentStatus(data.get("status") or TournamentStatus.UPCOMING),
            max_teams=int(data.get("maxTeams", 0)),
            registered_teams=[
                Team.from_dict(t) for t in dict_values(data.get("registeredTeams"))
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the stored document for this tournament."""
        return {
            "id": self.id,
            "name": self.name,
            "game": self.game,
            "format": self.format,
            "startDate": iso(self.start_date),
            "endDate": iso(self.end_date),
            "prizePool": self.prize_pool,
            "status": self.status.value,
            "maxTeams": self.max_teams,
            "registeredTeams": [t.to_dict() for t in self.registered_teams],
        }
