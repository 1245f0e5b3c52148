"""Tests for the tournament repository."""

from __future__ import annotations

import datetime
import unittest

from arena.teams.models import Team
from arena.tournaments.models import Tournament, TournamentStatus
from tests.conftest import make_repositories


class TournamentModelTestCase(unittest.TestCase):
    def test_wire_format(self) -> None:
        tournament = Tournament(
            name="Spring Cup",
            start_date=datetime.date(2025, 3, 1),
            status=TournamentStatus.REGISTRATION_OPEN,
            max_teams=8,
            registered_teams=[Team(name="Alpha", id=1)],
            id=4,
        )

        data = tournament.to_dict()

        self.assertEqual(data["status"], "REGISTRATION_OPEN")
        self.assertEqual(data["startDate"], "2025-03-01")
        self.assertEqual(data["registeredTeams"][0]["name"], "Alpha")
        self.assertEqual(Tournament.from_dict(data), tournament)

    def test_is_full(self) -> None:
        self.assertFalse(Tournament(max_teams=0, registered_teams=[Team()]).is_full)
        self.assertFalse(Tournament(max_teams=2, registered_teams=[Team()]).is_full)
        self.assertTrue(
            Tournament(max_teams=2, registered_teams=[Team(), Team()]).is_full
        )


class TournamentRepositoryTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.repos, self.fake = make_repositories()
        self.tournaments = self.repos.tournaments
        self.teams = self.repos.teams

    def _tournament(self, name="Cup", start=None, **kwargs) -> int:
        return self.tournaments.create(
            Tournament(name=name, start_date=start, **kwargs)
        )

    def test_register_team(self) -> None:
        tournament_id = self._tournament(max_teams=4)
        team_id = self.teams.create(Team(name="Alpha"))

        self.assertTrue(self.tournaments.register_team(tournament_id, team_id))

        teams = self.tournaments.get_registered_teams(tournament_id)
        self.assertEqual([t.name for t in teams], ["Alpha"])

    def test_register_team_rejects_duplicates(self) -> None:
        tournament_id = self._tournament()
        team_id = self.teams.create(Team(name="Alpha"))
        self.tournaments.register_team(tournament_id, team_id)

        self.assertFalse(self.tournaments.register_team(tournament_id, team_id))
        self.assertEqual(
            len(self.tournaments.get_by_id(tournament_id).registered_teams), 1
        )

    def test_register_team_rejects_when_full(self) -> None:
        tournament_id = self._tournament(max_teams=1)
        first = self.teams.create(Team(name="Alpha"))
        second = self.teams.create(Team(name="Bravo"))

        self.assertTrue(self.tournaments.register_team(tournament_id, first))
        self.assertFalse(self.tournaments.register_team(tournament_id, second))

    def test_register_unknown_team_or_tournament(self) -> None:
        tournament_id = self._tournament()
        team_id = self.teams.create(Team(name="Alpha"))

        self.assertFalse(self.tournaments.register_team(tournament_id, 99))
        self.assertFalse(self.tournaments.register_team(99, team_id))

    def test_read_refreshes_team_snapshots(self) -> None:
        tournament_id = self._tournament()
        team_id = self.teams.create(Team(name="Alpha", wins=0))
        self.tournaments.register_team(tournament_id, team_id)

        self.teams.update_record(team_id, won=True)

        team = self.tournaments.get_by_id(tournament_id).registered_teams[0]
        self.assertEqual(team.wins, 1)
        # The stored snapshot is still the old copy
        stored = self.fake.get(f"tournaments/{tournament_id}")["registeredTeams"]
        self.assertEqual(stored[0]["wins"], 0)

    def test_read_drops_deleted_teams(self) -> None:
        tournament_id = self._tournament()
        alpha = self.teams.create(Team(name="Alpha"))
        bravo = self.teams.create(Team(name="Bravo"))
        self.tournaments.register_team(tournament_id, alpha)
        self.tournaments.register_team(tournament_id, bravo)

        self.teams.delete(alpha)

        teams = self.tournaments.get_registered_teams(tournament_id)
        self.assertEqual([t.name for t in teams], ["Bravo"])

    def test_read_keeps_snapshot_when_team_unreadable(self) -> None:
        tournament_id = self._tournament()
        team_id = self.teams.create(Team(name="Alpha"))
        self.tournaments.register_team(tournament_id, team_id)
        self.fake.fail("teams", 500)

        with self.assertLogs("arena.tournaments.services", level="WARNING"):
            teams = self.tournaments.get_registered_teams(tournament_id)

        self.assertEqual([t.name for t in teams], ["Alpha"])

    def test_get_all_latest_first(self) -> None:
        self._tournament("Old", datetime.date(2023, 1, 1))
        self._tournament("Undated")
        self._tournament("New", datetime.date(2025, 1, 1))

        names = [t.name for t in self.tournaments.get_all()]

        self.assertEqual(names, ["New", "Old", "Undated"])

    def test_get_by_status(self) -> None:
        self._tournament("Late", datetime.date(2025, 6, 1))
        self._tournament(
            "Open B", datetime.date(2025, 5, 1),
            status=TournamentStatus.REGISTRATION_OPEN,
        )
        self._tournament(
            "Open A", datetime.date(2025, 4, 1),
            status=TournamentStatus.REGISTRATION_OPEN,
        )

        names = [t.name for t in self.tournaments.get_by_status("REGISTRATION_OPEN")]

        self.assertEqual(names, ["Open A", "Open B"])


if __name__ == "__main__":
    unittest.main()
