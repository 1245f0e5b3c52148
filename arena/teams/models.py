"""Data models for teams."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from arena.utils import iso, optional_int, parse_date

if TYPE_CHECKING:
    from arena.players.models import Player


@dataclass
class Team:
    """A team document in the realtime database.

    ``players`` is filled in at read time from the players collection and is
    never written back to the team document.
    """

    name: Optional[str] = None
    tag: Optional[str] = None
    region: Optional[str] = None
    created_date: datetime.date = field(default_factory=datetime.date.today)
    wins: int = 0
    losses: int = 0
    draws: int = 0
    leader_id: Optional[int] = None
    players: list[Player] = field(default_factory=list)
    id: int = 0

    @property
    def total_matches(self) -> int:
        """Number of matches with a recorded result."""
        return self.wins + self.losses + self.draws

    @property
    def win_rate(self) -> float:
        """Percentage of recorded matches won."""
        total = self.total_matches
        return self.wins / total * 100 if total > 0 else 0.0

    @property
    def leader(self) -> Player | None:
        """The roster member whose id is leader_id, if attached."""
        if self.leader_id is None:
            return None
        return next((p for p in self.players if p.id == self.leader_id), None)

    @property
    def available_players(self) -> list[Player]:
        """Roster members currently marked available."""
        return [p for p in self.players if p.available]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Team:
        """Build a team from its stored document."""
        return cls(
            id=int(data.get("id") or 0),
            name=data.get("name"),
            tag=data.get("tag"),
            region=data.get("region"),
            created_date=parse_date(data.get("createdDate")) or datetime.date.today(),
            wins=int(data.get("wins", 0)),
            losses=int(data.get("losses", 0)),
            draws=int(data.get("draws", 0)),
            leader_id=optional_int(data.get("leaderId")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the stored document for this team."""
        return {
            "id": self.id,
            "name": self.name,
            "tag": self.tag,
            "region": self.region,
            "createdDate": iso(self.created_date),
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "leaderId": self.leader_id,
        }
