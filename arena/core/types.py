"""Core data types for the arena application."""

from typing import TypedDict


class VoteTally(TypedDict):
    """Aggregate figures for a team's active votes."""

    totalVoters: int
    totalVotes: int
    totalCandidates: int
