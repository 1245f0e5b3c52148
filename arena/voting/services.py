"""Leader election over a per-team vote list."""

from __future__ import annotations

import datetime
import logging
from collections import Counter
from typing import TYPE_CHECKING, Callable

from arena.core.constants import LEADER_VOTES_ROOT
from arena.database.allocator import IdentifierAllocator
from arena.errors import StoreError

from .models import LeaderVote

if TYPE_CHECKING:
    from arena.core.types import VoteTally
    from arena.database.client import DocumentStoreClient

logger = logging.getLogger(__name__)


class VotingLedger:
    """Append-mostly vote log stored as one list at ``leader_votes/<team_id>``.

    Each voter has at most one active ballot, maintained by deactivating the
    voter's earlier ballots whenever a new one is cast. That rule is enforced
    by a read-modify-write of the whole list with no version check, so two
    concurrent ``cast_vote`` calls for the same team both read the same list
    and the second PUT replaces the first: one ballot is lost, and
    interleavings with other edits can leave a voter with more than one active
    ballot. Callers that need the invariant must serialise votes per team.
    """

    def __init__(
        self,
        client: DocumentStoreClient,
        allocator: IdentifierAllocator | None = None,
        clock: Callable[[], datetime.datetime] = datetime.datetime.now,
    ) -> None:
        """Initialize the ledger."""
        self.client = client
        self.allocator = allocator or IdentifierAllocator(client)
        self.clock = clock

    @staticmethod
    def list_path(team_id: int) -> str:
        """Return the document path of a team's vote list."""
        return f"{LEADER_VOTES_ROOT}/{team_id}"

    def _read_votes(self, team_id: int) -> list[LeaderVote]:
        """Read a team's votes in casting order; raises StoreError."""
        collection = self.client.read_collection(
            self.list_path(team_id), LeaderVote.from_dict
        )
        return sorted(collection.values(), key=lambda v: (v.vote_time, v.id))

    def get_votes(self, team_id: int) -> list[LeaderVote]:
        """Return every ballot for a team, active or superseded."""
        try:
            return self._read_votes(team_id)
        except StoreError as e:
            logger.error(f"Error getting votes for team {team_id}: {e}")
            return []

    def cast_vote(self, team_id: int, voter_id: int, candidate_id: int) -> bool:
        """Record voter_id's ballot for candidate_id, superseding earlier ones."""
        try:
            # 1. Read the whole list
            votes = self._read_votes(team_id)

            # 2. Supersede the voter's previous ballots
            for vote in votes:
                if vote.voter_id == voter_id:
                    vote.active = False

            # 3. Append the new ballot
            vote_id = self.allocator.allocate(LEADER_VOTES_ROOT)
            votes.append(
                LeaderVote(
                    id=vote_id,
                    team_id=team_id,
                    voter_id=voter_id,
                    candidate_id=candidate_id,
                    vote_time=self.clock(),
                    active=True,
                )
            )

            # 4. Write it all back, unconditionally
            self.client.write(
                self.list_path(team_id), [vote.to_dict() for vote in votes]
            )
        except StoreError as e:
            logger.error(f"Error casting vote for team {team_id}: {e}")
            return False
        return True

    def get_active_votes(self, team_id: int) -> list[LeaderVote]:
        """Return the ballots that currently count."""
        return [vote for vote in self.get_votes(team_id) if vote.active]

    def get_vote_counts(self, team_id: int) -> dict[int, int]:
        """Tally active ballots per candidate, highest count first.

        Equal counts are ordered by candidate id.
        """
        tally = Counter(vote.candidate_id for vote in self.get_active_votes(team_id))
        ranked = sorted(tally.items(), key=lambda item: (-item[1], item[0]))
        return dict(ranked)

    def get_current_leader(self, team_id: int) -> int | None:
        """Return the plurality candidate; a tie goes to the lowest id."""
        counts = self.get_vote_counts(team_id)
        return next(iter(counts), None)

    def has_voted(self, team_id: int, voter_id: int) -> bool:
        """True if voter_id has an active ballot for the team."""
        return any(v.voter_id == voter_id for v in self.get_active_votes(team_id))

    def reset_votes(self, team_id: int) -> bool:
        """Delete a team's whole vote list."""
        try:
            self.client.delete(self.list_path(team_id))
        except StoreError as e:
            logger.error(f"Error resetting votes for team {team_id}: {e}")
            return False
        return True

    def get_voting_stats(self, team_id: int) -> VoteTally:
        """Summarise the active ballots of a team."""
        active = self.get_active_votes(team_id)
        return {
            "totalVoters": len({vote.voter_id for vote in active}),
            "totalVotes": len(active),
            "totalCandidates": len({vote.candidate_id for vote in active}),
        }
