"""Data models for matches."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from arena.utils import dict_values, iso, optional_int, parse_datetime


class MatchStatus(str, Enum):
    """Lifecycle states of a match."""

    SCHEDULED = "SCHEDULED"
    LIVE = "LIVE"
    COMPLETED = "COMPLETED"
    POSTPONED = "POSTPONED"
    CANCELLED = "CANCELLED"


@dataclass
class PlayerMatchStats:
    """One player's figures for one match, stored inside the match document."""

    match_id: int = 0
    player_id: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    damage_dealt: int = 0
    damage_taken: int = 0
    gold_earned: int = 0
    mvp: bool = False
    id: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerMatchStats:
        """Build a stats record from its stored form."""
        return cls(
            id=int(data.get("id") or 0),
            match_id=int(data.get("matchId", 0)),
            player_id=int(data["playerId"]),
            kills=int(data.get("kills", 0)),
            deaths=int(data.get("deaths", 0)),
            assists=int(data.get("assists", 0)),
            damage_dealt=int(data.get("damageDealt", 0)),
            damage_taken=int(data.get("damageTaken", 0)),
            gold_earned=int(data.get("goldEarned", 0)),
            mvp=bool(data.get("mvp", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the stored form of this stats record."""
        return {
            "id": self.id,
            "matchId": self.match_id,
            "playerId": self.player_id,
            "kills": self.kills,
            "deaths": self.deaths,
            "assists": self.assists,
            "damageDealt": self.damage_dealt,
            "damageTaken": self.damage_taken,
            "goldEarned": self.gold_earned,
            "mvp": self.mvp,
        }


@dataclass
class Match:
    """A match document in the realtime database."""

    tournament_id: int = 0
    team1_id: int = 0
    team2_id: int = 0
    scheduled_time: Optional[datetime.datetime] = None
    round: Optional[str] = None
    team1_score: int = 0
    team2_score: int = 0
    actual_start_time: Optional[datetime.datetime] = None
    actual_end_time: Optional[datetime.datetime] = None
    status: MatchStatus = MatchStatus.SCHEDULED
    winner_id: Optional[int] = None
    player_stats: list[PlayerMatchStats] = field(default_factory=list)
    id: int = 0

    @property
    def is_completed(self) -> bool:
        """True once a result has been recorded."""
        return self.status == MatchStatus.COMPLETED

    @property
    def is_live(self) -> bool:
        """True while the match is being played."""
        return self.status == MatchStatus.LIVE

    @property
    def score_display(self) -> str:
        """Score formatted as ``team1 - team2``."""
        return f"{self.team1_score} - {self.team2_score}"

    def involves(self, team_id: int) -> bool:
        """True if team_id is one of the two sides."""
        return team_id in (self.team1_id, self.team2_id)

    def start(self) -> None:
        """Mark the match live, stamping the start time."""
        self.status = MatchStatus.LIVE
        self.actual_start_time = datetime.datetime.now()

    def end(self, winner_id: int | None) -> None:
        """Mark the match completed; a None winner records a draw."""
        self.status = MatchStatus.COMPLETED
        self.actual_end_time = datetime.datetime.now()
        self.winner_id = winner_id

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Match:
        """Build a match from its stored document."""
        return cls(
            id=int(data.get("id") or 0),
            tournament_id=int(data.get("tournamentId", 0)),
            team1_id=int(data.get("team1Id", 0)),
            team2_id=int(data.get("team2Id", 0)),
            team1_score=int(data.get("team1Score", 0)),
            team2_score=int(data.get("team2Score", 0)),
            scheduled_time=parse_datetime(data.get("scheduledTime")),
            actual_start_time=parse_datetime(data.get("actualStartTime")),
            actual_end_time=parse_datetime(data.get("actualEndTime")),
            status=MatchStatus(data.get("status") or MatchStatus.SCHEDULED),
            round=data.get("round"),
            winner_id=optional_int(data.get("winnerId")),
            player_stats=[
                PlayerMatchStats.from_dict(s)
                for s in dict_values(data.get("playerStats"))
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the stored document for this match."""
        return {
            "id": self.id,
            "tournamentId": self.tournament_id,
            "team1Id": self.team1_id,
            "team2Id": self.team2_id,
            "team1Score": self.team1_score,
            "team2Score": self.team2_score,
            "scheduledTime": iso(self.scheduled_time),
            "actualStartTime": iso(self.actual_start_time),
            "actualEndTime": iso(self.actual_end_time),
            "status": self.status.value,
            "round": self.round,
            "winnerId": self.winner_id,
            "playerStats": [s.to_dict() for s in self.player_stats],
        }
