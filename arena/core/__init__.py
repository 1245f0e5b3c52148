"""Core module for the arena application."""

from .types import VoteTally

__all__ = ["VoteTally"]
