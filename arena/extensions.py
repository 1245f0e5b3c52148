"""Flask extensions for the application."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import current_app

from arena.database.allocator import IdentifierAllocator
from arena.database.client import DocumentStoreClient
from arena.exports.services import JsonExportService
from arena.matches.services import MatchRepository
from arena.organizers.services import OrganizerRepository
from arena.players.services import PlayerRepository
from arena.stats.services import TournamentStatsService
from arena.teams.services import TeamRepository
from arena.tournaments.services import TournamentRepository
from arena.voting.services import VotingLedger

if TYPE_CHECKING:
    from flask import Flask

EXTENSION_KEY = "arena"


class Repositories:
    """Every repository, built once around one shared client and allocator."""

    def __init__(self, client: DocumentStoreClient) -> None:
        """Initialize the repositories."""
        self.client = client
        self.allocator = IdentifierAllocator(client)
        self.players = PlayerRepository(client, self.allocator)
        self.teams = TeamRepository(client, self.allocator, self.players)
        self.tournaments = TournamentRepository(client, self.allocator, self.teams)
        self.matches = MatchRepository(client, self.allocator)
        self.organizers = OrganizerRepository(client, self.allocator)
        self.votes = VotingLedger(client, self.allocator)
        self.stats = TournamentStatsService(self.matches, self.players)
        self.exports = JsonExportService()


class RealtimeDatabase:
    """Owns the per-app DocumentStoreClient, configured from app.config."""

    def __init__(self, app: Flask | None = None) -> None:
        """Initialize the extension."""
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Build the client and repositories for app."""
        client = app.config.get("STORE_CLIENT")
        if client is None:
            url = app.config.get("FIREBASE_DATABASE_URL")
            if not url:
                app.logger.warning(
                    "FIREBASE_DATABASE_URL is not set; the database is unavailable."
                )
                return
            client = DocumentStoreClient(
                url,
                auth_token=app.config.get("FIREBASE_AUTH_TOKEN"),
                auth_param=app.config.get("FIREBASE_AUTH_PARAM", "auth"),
                timeout=app.config["STORE_TIMEOUT"],
                max_attempts=app.config["STORE_MAX_ATTEMPTS"],
                retry_delay=app.config["STORE_RETRY_DELAY"],
            )
        app.extensions[EXTENSION_KEY] = Repositories(client)

    @property
    def client(self) -> DocumentStoreClient:
        """The current app's client."""
        return repositories().client


def repositories(app: Flask | None = None) -> Repositories:
    """Return the repositories registered on app (default: current_app)."""
    app = app or current_app
    try:
        return app.extensions[EXTENSION_KEY]
    except KeyError:
        raise RuntimeError("The realtime database is not configured.") from None


store = RealtimeDatabase()
