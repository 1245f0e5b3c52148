"""Tests for the generic repository and the id allocator."""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock

from arena.core.constants import FAILED_ID
from arena.database.allocator import IdentifierAllocator
from arena.errors import AllocationExhausted
from arena.organizers.models import Organizer
from arena.players.models import Player
from arena.teams.models import Team
from tests.conftest import make_client, make_repositories
from tests.mock_utils import MockRealtimeDatabase


class IdentifierAllocatorTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.fake = MockRealtimeDatabase()
        self.allocator = IdentifierAllocator(make_client(self.fake))

    def test_counter_path(self) -> None:
        self.assertEqual(IdentifierAllocator.counter_path("teams"), "counters/teams")

    def test_counters_are_per_entity_type(self) -> None:
        self.assertEqual(self.allocator.allocate("teams"), 1)
        self.assertEqual(self.allocator.allocate("teams"), 2)
        self.assertEqual(self.allocator.allocate("players"), 1)
        self.assertEqual(self.fake.get("counters"), {"teams": 2, "players": 1})

    def test_delegates_to_client(self) -> None:
        client = MagicMock()
        client.next_id.return_value = 7

        self.assertEqual(IdentifierAllocator(client).allocate("matches"), 7)
        client.next_id.assert_called_once_with("counters/matches")


class EntityRepositoryTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.repos, self.fake = make_repositories()
        self.teams = self.repos.teams

    def test_create_assigns_sequential_ids(self) -> None:
        first = Team(name="Alpha", tag="ALP")
        second = Team(name="Bravo", tag="BRV")

        self.assertEqual(self.teams.create(first), 1)
        self.assertEqual(self.teams.create(second), 2)

        self.assertEqual(first.id, 1)
        self.assertEqual(self.fake.get("teams/2")["id"], 2)
        self.assertEqual(self.fake.get("teams/2")["name"], "Bravo")
        self.assertEqual(self.fake.get("counters/teams"), 2)

    def test_read_after_write(self) -> None:
        team = Team(name="Alpha", tag="ALP", region="EU", wins=3)
        team_id = self.teams.create(team)

        fetched = self.teams.get_by_id(team_id)

        self.assertEqual(fetched, team)

    def test_read_after_write_player_with_password(self) -> None:
        player = Player(username="ace", password="Password123!", team_id=1)  # nosec
        player_id = self.repos.players.create(player)

        fetched = self.repos.players.get_by_id(player_id)

        self.assertEqual(fetched, player)
        self.assertNotEqual(player.password, "Password123!")

    def test_read_after_write_organizer(self) -> None:
        organizer = Organizer(username="host", password="Password123!")  # nosec
        organizer_id = self.repos.organizers.create(organizer)

        fetched = self.repos.organizers.get_by_id(organizer_id)

        self.assertEqual(fetched, organizer)

    def test_update_after_password_change_reads_back(self) -> None:
        player = Player(username="ace", password="first")  # nosec
        self.repos.players.create(player)
        player.password = "second"  # nosec

        self.assertTrue(self.repos.players.update(player))

        self.assertEqual(self.repos.players.get_by_id(player.id), player)
        self.assertIsNotNone(self.repos.players.authenticate("ace", "second"))

    def test_create_fails_soft_when_allocation_fails(self) -> None:
        self.fake.fail("counters", 500)

        with self.assertLogs("arena.database.repository", level="ERROR"):
            result = self.teams.create(Team(name="Alpha"))

        self.assertEqual(result, FAILED_ID)
        self.assertEqual(self.fake.calls("PUT"), [])

    def test_create_fails_soft_on_exhaustion(self) -> None:
        self.repos.allocator.allocate = MagicMock(
            side_effect=AllocationExhausted("counters/teams", 5)
        )
        self.assertEqual(self.teams.create(Team(name="Alpha")), FAILED_ID)

    def test_failed_write_burns_the_id(self) -> None:
        self.fake.fail("teams", 500)
        self.assertEqual(self.teams.create(Team(name="Alpha")), FAILED_ID)

        self.fake.failures.clear()
        self.assertEqual(self.teams.create(Team(name="Alpha")), 2)

    def test_get_by_id_missing(self) -> None:
        self.assertIsNone(self.teams.get_by_id(42))

    def test_get_by_id_fails_soft(self) -> None:
        self.fake.set("teams/1", {"id": 1, "name": "Alpha"})
        self.fake.fail("teams", 500)

        with self.assertLogs("arena.database.repository", level="ERROR"):
            self.assertIsNone(self.teams.get_by_id(1))

    def test_get_by_id_undecodable(self) -> None:
        self.fake.set("teams/1", {"id": 1, "wins": "many"})
        self.assertIsNone(self.teams.get_by_id(1))

    def test_get_all_sorted_by_name(self) -> None:
        for name in ["charlie", "Alpha", None, "bravo"]:
            self.teams.create(Team(name=name))

        names = [team.name for team in self.teams.get_all()]

        self.assertEqual(names, ["Alpha", "bravo", "charlie", None])

    def test_get_all_empty(self) -> None:
        self.assertEqual(self.teams.get_all(), [])

    def test_get_all_fails_soft(self) -> None:
        self.fake.fail("teams", 500)
        self.assertEqual(self.teams.get_all(), [])

    def test_get_all_fills_missing_id_from_key(self) -> None:
        self.fake.set("teams/5", {"name": "Legacy"})
        self.assertEqual([team.id for team in self.teams.get_all()], [5])

    def test_update_overwrites(self) -> None:
        team = Team(name="Alpha", tag="ALP")
        self.teams.create(team)
        team.tag = None
        team.region = "NA"

        self.assertTrue(self.teams.update(team))

        stored = self.fake.get("teams/1")
        self.assertNotIn("tag", stored)
        self.assertEqual(stored["region"], "NA")

    def test_update_fails_soft(self) -> None:
        team = Team(name="Alpha")
        self.teams.create(team)
        self.fake.fail("teams", 500)

        self.assertFalse(self.teams.update(team))

    def test_update_without_id_is_refused(self) -> None:
        with self.assertLogs("arena.database.repository", level="ERROR"):
            self.assertFalse(self.teams.update(Team(name="Ghost")))

        self.assertEqual(self.fake.calls("PUT"), [])
        self.assertIsNone(self.fake.get("teams"))

    def test_delete(self) -> None:
        self.teams.create(Team(name="Alpha"))

        self.assertTrue(self.teams.delete(1))
        self.assertIsNone(self.teams.get_by_id(1))
        # Ids are never reused
        self.assertEqual(self.teams.create(Team(name="Bravo")), 2)

    def test_delete_fails_soft(self) -> None:
        self.fake.fail("teams", 500)
        self.assertFalse(self.teams.delete(1))

    def test_find(self) -> None:
        self.teams.create(Team(name="Alpha", region="EU"))
        self.teams.create(Team(name="Bravo", region="NA"))
        self.teams.create(Team(name="Charlie", region="EU"))

        found = self.teams.find(lambda t: t.region == "EU")

        self.assertEqual([t.name for t in found], ["Alpha", "Charlie"])

    def test_modify_missing_record(self) -> None:
        change = MagicMock()
        self.assertFalse(self.teams.modify(9, change))
        change.assert_not_called()


if __name__ == "__main__":
    unittest.main()
