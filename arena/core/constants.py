"""Global constants for the arena application."""

# Collection roots in the realtime database
PLAYERS_ROOT = "players"
TEAMS_ROOT = "teams"
TOURNAMENTS_ROOT = "tournaments"
MATCHES_ROOT = "matches"
ORGANIZERS_ROOT = "organizers"
LEADER_VOTES_ROOT = "leader_votes"
COUNTERS_ROOT = "counters"

# Counter names that have no collection of their own
PLAYER_MATCH_STATS_COUNTER = "player_match_stats"

# Store protocol
ETAG_REQUEST_HEADER = "X-Firebase-ETag"
ETAG_RESPONSE_HEADER = "ETag"
IF_MATCH_HEADER = "If-Match"
PRECONDITION_FAILED = 412

# Counter allocation
DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_RETRY_DELAY = 0.05
DEFAULT_TIMEOUT = 10

# Returned by create() when the record could not be stored
FAILED_ID = -1

# Default organizer created by scripts/initialize_admin.py
DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"  # nosec B105
DEFAULT_ADMIN_EMAIL = "admin@esports-arena.com"
