"""Data models for players."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any, Optional

from arena.utils import iso, optional_int, parse_date


@dataclass
class Player:
    """A player document in the realtime database."""

    username: Optional[str] = None
    real_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    password: Optional[str] = None
    team_id: Optional[int] = None
    join_date: datetime.date = field(default_factory=datetime.date.today)
    total_kills: int = 0
    total_deaths: int = 0
    total_assists: int = 0
    matches_played: int = 0
    matches_won: int = 0
    available: bool = True
    availability_reason: Optional[str] = None
    id: int = 0

    @property
    def kda(self) -> float:
        """(kills + assists) / deaths, with zero deaths counted as one."""
        return (self.total_kills + self.total_assists) / max(self.total_deaths, 1)

    @property
    def win_rate(self) -> float:
        """Percentage of matches won."""
        if self.matches_played == 0:
            return 0.0
        return self.matches_won / self.matches_played * 100

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Player:
        """Build a player from its stored document."""
        return cls(
            id=int(data.get("id") or 0),
            username=data.get("username"),
            real_name=data.get("realName"),
            email=data.get("email"),
            role=data.get("role"),
            password=data.get("password"),
            team_id=optional_int(data.get("teamId")),
            join_date=parse_date(data.get("joinDate")) or datetime.date.today(),
            total_kills=int(data.get("totalKills", 0)),
            total_deaths=int(data.get("totalDeaths", 0)),
            total_assists=int(data.get("totalAssists", 0)),
            matches_played=int(data.get("matchesPlayed", 0)),
            matches_won=int(data.get("matchesWon", 0)),
            available=bool(data.get("available", True)),
            availability_reason=data.get("availabilityReason"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the stored document for this player."""
        return {
            "id": self.id,
            "username": self.username,
            "realName": self.real_name,
            "email": self.email,
            "role": self.role,
            "password": self.password,
            "teamId": self.team_id,
            "joinDate": iso(self.join_date),
            "totalKills": self.total_kills,
            "totalDeaths": self.total_deaths,
            "totalAssists": self.total_assists,
            "matchesPlayed": self.matches_played,
            "matchesWon": self.matches_won,
            "available": self.available,
            "availabilityReason": self.availability_reason,
        }

    def public_dict(self) -> dict[str, Any]:
        """Return the document without the password hash."""
        data = self.to_dict()
        data.pop("password", None)
        return data
