"""Service for writing arena records to JSON files and reading them back."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from arena.database.client import DECODE_FAILURES
from arena.matches.models import Match, PlayerMatchStats
from arena.players.models import Player
from arena.teams.models import Team
from arena.tournaments.models import Tournament

if TYPE_CHECKING:
    from arena.extensions import Repositories

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_INDENT = 2


@dataclass
class ExportData:
    """A full snapshot of the arena's records."""

    players: list[Player] = field(default_factory=list)
    teams: list[Team] = field(default_factory=list)
    tournaments: list[Tournament] = field(default_factory=list)
    matches: list[Match] = field(default_factory=list)
    stats: list[PlayerMatchStats] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExportData:
        """Build a snapshot from its exported form; missing sections are empty."""
        return cls(
            players=[Player.from_dict(p) for p in data.get("players") or []],
            teams=[Team.from_dict(t) for t in data.get("teams") or []],
            tournaments=[
                Tournament.from_dict(t) for t in data.get("tournaments") or []
            ],
            matches=[Match.from_dict(m) for m in data.get("matches") or []],
            stats=[PlayerMatchStats.from_dict(s) for s in data.get("stats") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the exported form of this snapshot."""
        return {
            "players": [p.to_dict() for p in self.players],
            "teams": [t.to_dict() for t in self.teams],
            "tournaments": [t.to_dict() for t in self.tournaments],
            "matches": [m.to_dict() for m in self.matches],
            "stats": [s.to_dict() for s in self.stats],
        }


def collect_export(repos: Repositories) -> ExportData:
    """Read every collection into one snapshot.

    Per-match stats are flattened out of the match documents that hold them.
    """
    matches = repos.matches.get_all()
    return ExportData(
        players=repos.players.get_all(),
        teams=repos.teams.get_all(),
        tournaments=repos.tournaments.get_all(),
        matches=matches,
        stats=[stats for match in matches for stats in match.player_stats],
    )


def _plain(obj: Any) -> Any:
    """Convert models (and lists of them) to JSON-ready values."""
    if isinstance(obj, (list, tuple)):
        return [_plain(item) for item in obj]
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return obj


class JsonExportService:
    """Exports records to JSON files and imports them back.

    Failures are logged and reported as ``False`` from exports and ``None``
    from imports, the same fail-soft contract the repositories follow.
    Imports only decode files; writing the records to the database is up to
    the caller.
    """

    def __init__(self, indent: int | None = JSON_INDENT) -> None:
        """Initialize the service."""
        self.indent = indent

    def _write(self, obj: Any, path: str, label: str) -> bool:
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(_plain(obj), f, indent=self.indent)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error exporting {label} to {path}: {e}")
            return False
        logger.info(f"Exported {label} to {path}")
        return True

    def _read(self, path: str, decode: Callable[[Any], T], label: str) -> T | None:
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
            value = decode(raw)
        except OSError as e:
            logger.error(f"Error importing {label} from {path}: {e}")
            return None
        except DECODE_FAILURES as e:
            logger.error(f"Malformed {label} in {path}: {e!r}")
            return None
        logger.info(f"Imported {label} from {path}")
        return value

    @staticmethod
    def _decode_list(model: Any) -> Callable[[Any], list[Any]]:
        def decode(raw: Any) -> list[Any]:
            if not isinstance(raw, list):
                raise TypeError(f"expected a JSON array, got {type(raw).__name__}")
            return [model.from_dict(item) for item in raw]

        return decode

    # -- full snapshot ---------------------------------------------------

    def export_all(self, data: ExportData, path: str) -> bool:
        """Write a full snapshot to path."""
        return self._write(data, path, "all data")

    def import_all(self, path: str) -> ExportData | None:
        """Read a full snapshot from path."""
        return self._read(path, ExportData.from_dict, "all data")

    # -- single records ----------------------------------------------------

    def export_player(self, player: Player, path: str) -> bool:
        return self._write(player, path, "player")

    def import_player(self, path: str) -> Player | None:
        return self._read(path, Player.from_dict, "player")

    def export_team(self, team: Team, path: str) -> bool:
        return self._write(team, path, "team")

    def import_team(self, path: str) -> Team | None:
        return self._read(path, Team.from_dict, "team")

    def export_tournament(self, tournament: Tournament, path: str) -> bool:
        return self._write(tournament, path, "tournament")

    def import_tournament(self, path: str) -> Tournament | None:
        return self._read(path, Tournament.from_dict, "tournament")

    # -- lists -------------------------------------------------------------

    def export_players(self, players: list[Player], path: str) -> bool:
        """Write a list of players to path."""
        return self._write(players, path, "players")

    def import_players(self, path: str) -> list[Player] | None:
        """Read a list of players from path."""
        return self._read(path, self._decode_list(Player), "players")

    def export_teams(self, teams: list[Team], path: str) -> bool:
        """Write a list of teams to path."""
        return self._write(teams, path, "teams")

    def import_teams(self, path: str) -> list[Team] | None:
        """Read a list of teams from path."""
        return self._read(path, self._decode_list(Team), "teams")

    # -- strings -----------------------------------------------------------

    def to_json_string(self, obj: Any) -> str | None:
        """Serialize a model, a snapshot or a list of models."""
        try:
            return json.dumps(_plain(obj), indent=self.indent)
        except (TypeError, ValueError) as e:
            logger.error(f"Error converting to JSON: {e}")
            return None

    def from_json_string(self, text: str, model: type[T]) -> T | None:
        """Parse text into an instance of model (any class with from_dict)."""
        try:
            return model.from_dict(json.loads(text))  # type: ignore[attr-defined]
        except DECODE_FAILURES as e:
            logger.error(f"Error parsing JSON as {model.__name__}: {e!r}")
            return None
