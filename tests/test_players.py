"""Tests for the player repository and model."""

from __future__ import annotations

import datetime
import unittest

from arena.auth import hash_password, is_password_hash, verify_password
from arena.players.models import Player
from tests.conftest import make_repositories

TEST_PASSWORD = "Password123!"  # nosec


class PlayerModelTestCase(unittest.TestCase):
    def test_kda_counts_zero_deaths_as_one(self) -> None:
        player = Player(total_kills=6, total_assists=4, total_deaths=0)
        self.assertEqual(player.kda, 10.0)

    def test_kda(self) -> None:
        player = Player(total_kills=6, total_assists=4, total_deaths=4)
        self.assertEqual(player.kda, 2.5)

    def test_win_rate(self) -> None:
        self.assertEqual(Player().win_rate, 0.0)
        self.assertEqual(Player(matches_played=4, matches_won=3).win_rate, 75.0)

    def test_wire_format(self) -> None:
        player = Player(
            username="ace",
            real_name="Ada Ace",
            team_id=3,
            join_date=datetime.date(2024, 5, 1),
            id=7,
        )

        data = player.to_dict()

        self.assertEqual(data["realName"], "Ada Ace")
        self.assertEqual(data["teamId"], 3)
        self.assertEqual(data["joinDate"], "2024-05-01")
        self.assertEqual(Player.from_dict(data), player)

    def test_public_dict_hides_password(self) -> None:
        self.assertNotIn("password", Player(username="ace", password="x").public_dict())


class PasswordTestCase(unittest.TestCase):
    def test_hash_and_verify(self) -> None:
        hashed = hash_password(TEST_PASSWORD)
        self.assertTrue(is_password_hash(hashed))
        self.assertTrue(verify_password(hashed, TEST_PASSWORD))
        self.assertFalse(verify_password(hashed, "wrong"))

    def test_hash_is_idempotent(self) -> None:
        hashed = hash_password(TEST_PASSWORD)
        self.assertEqual(hash_password(hashed), hashed)

    def test_legacy_plaintext(self) -> None:
        self.assertTrue(verify_password("letmein", "letmein"))
        self.assertFalse(verify_password("letmein", "LETMEIN"))

    def test_plaintext_with_hash_prefix_is_not_a_hash(self) -> None:
        self.assertFalse(is_password_hash("pbkdf2:hunter2"))
        self.assertFalse(is_password_hash("scrypt:a$b"))
        self.assertTrue(is_password_hash(hash_password("pbkdf2:hunter2")))

    def test_missing_credentials(self) -> None:
        self.assertIsNone(hash_password(None))
        self.assertFalse(verify_password(None, "x"))
        self.assertFalse(verify_password("x", None))


class PlayerRepositoryTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.repos, self.fake = make_repositories()
        self.players = self.repos.players

    def _create(self, username, team_id=None, **kwargs) -> Player:
        player = Player(username=username, team_id=team_id, **kwargs)
        self.players.create(player)
        return player

    def test_password_stored_hashed(self) -> None:
        self._create("ace", password=TEST_PASSWORD)

        stored = self.fake.get("players/1")["password"]

        self.assertNotEqual(stored, TEST_PASSWORD)
        self.assertTrue(is_password_hash(stored))

    def test_authenticate(self) -> None:
        self._create("ace", password=TEST_PASSWORD)

        player = self.players.authenticate("ace", TEST_PASSWORD)

        self.assertIsNotNone(player)
        self.assertEqual(player.id, 1)
        self.assertIsNone(self.players.authenticate("ace", "wrong"))
        self.assertIsNone(self.players.authenticate("nobody", TEST_PASSWORD))

    def test_password_resembling_hash_prefix(self) -> None:
        self._create("ace", password="pbkdf2:hunter2")  # nosec

        stored = self.fake.get("players/1")["password"]

        self.assertNotEqual(stored, "pbkdf2:hunter2")
        self.assertIsNotNone(self.players.authenticate("ace", "pbkdf2:hunter2"))

    def test_authenticate_legacy_plaintext_record(self) -> None:
        self.fake.set("players/1", {"id": 1, "username": "old", "password": "pw"})
        self.assertIsNotNone(self.players.authenticate("old", "pw"))

    def test_get_all_sorted_by_username(self) -> None:
        for name in ["zed", "Ace", "mid"]:
            self._create(name)
        usernames = [p.username for p in self.players.get_all()]
        self.assertEqual(usernames, ["Ace", "mid", "zed"])

    def test_get_by_username_is_exact(self) -> None:
        self._create("Ace")
        self.assertIsNone(self.players.get_by_username("ace"))
        self.assertEqual(self.players.get_by_username("Ace").id, 1)

    def test_get_by_team(self) -> None:
        self._create("a", team_id=1)
        self._create("b", team_id=2)
        self._create("c", team_id=1, available=False)
        self._create("d")

        self.assertEqual([p.username for p in self.players.get_by_team(1)], ["a", "c"])
        self.assertEqual(
            [p.username for p in self.players.get_available_by_team(1)], ["a"]
        )

    def test_update_stats(self) -> None:
        self._create("ace")

        self.assertTrue(self.players.update_stats(1, 5, 2, 3, won=True))
        self.assertTrue(self.players.update_stats(1, 1, 4, 0, won=False))

        player = self.players.get_by_id(1)
        self.assertEqual(
            (
                player.total_kills,
                player.total_deaths,
                player.total_assists,
                player.matches_played,
                player.matches_won,
            ),
            (6, 6, 3, 2, 1),
        )

    def test_update_stats_missing_player(self) -> None:
        self.assertFalse(self.players.update_stats(9, 1, 1, 1, won=True))

    def test_update_availability(self) -> None:
        self._create("ace")

        self.players.update_availability(1, False, "injured")
        player = self.players.get_by_id(1)
        self.assertFalse(player.available)
        self.assertEqual(player.availability_reason, "injured")

        self.players.update_availability(1, True)
        self.assertIsNone(self.players.get_by_id(1).availability_reason)

    def test_read_modify_write_keeps_password_hash(self) -> None:
        self._create("ace", password=TEST_PASSWORD)
        self.players.update_stats(1, 1, 1, 1, won=False)
        self.assertIsNotNone(self.players.authenticate("ace", TEST_PASSWORD))


if __name__ == "__main__":
    unittest.main()
