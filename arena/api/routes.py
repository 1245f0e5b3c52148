"""Routes for the JSON API."""

from flask import current_app, jsonify, request

from arena.errors import AppError, AuthenticationError, NotFoundError, ValidationError
from arena.extensions import repositories

from . import bp


def _team_payload(team, with_roster=True):
    data = team.to_dict()
    data["totalMatches"] = team.total_matches
    data["winRate"] = team.win_rate
    if with_roster:
        data["players"] = [player.public_dict() for player in team.players]
    return data


def _int_field(payload, name):
    value = payload.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"'{name}' must be an integer.")
    return value


@bp.route("/teams")
def list_teams():
    """List every team with its roster."""
    teams = repositories().teams.get_all()
    return jsonify([_team_payload(team) for team in teams])


@bp.route("/teams/leaderboard")
def leaderboard():
    """Teams in standings order."""
    teams = repositories().teams.get_leaderboard()
    return jsonify([_team_payload(team, with_roster=False) for team in teams])


@bp.route("/teams/<int:team_id>")
def view_team(team_id):
    """A single team with its roster and leader."""
    team = repositories().teams.get_by_id(team_id)
    if team is None:
        raise NotFoundError("Team not found.")
    return jsonify(_team_payload(team))


@bp.route("/tournaments/<int:tournament_id>")
def view_tournament(tournament_id):
    """A tournament with the current records of its registered teams."""
    tournament = repositories().tournaments.get_by_id(tournament_id)
    if tournament is None:
        raise NotFoundError("Tournament not found.")
    data = tournament.to_dict()
    data["registeredTeams"] = [
        _team_payload(team, with_roster=False) for team in tournament.registered_teams
    ]
    return jsonify(data)


@bp.route("/teams/<int:team_id>/votes", methods=["POST"])
def cast_vote(team_id):
    """Cast a leader vote on behalf of a roster member."""
    payload = request.get_json(silent=True) or {}
    voter_id = _int_field(payload, "voterId")
    candidate_id = _int_field(payload, "candidateId")

    repos = repositories()
    team = repos.teams.get_by_id(team_id)
    if team is None:
        raise NotFoundError("Team not found.")
    roster = {player.id for player in team.players}
    if voter_id not in roster:
        raise ValidationError("Voter is not a member of this team.")
    if candidate_id not in roster:
        raise ValidationError("Candidate is not a member of this team.")

    if not repos.votes.cast_vote(team_id, voter_id, candidate_id):
        raise AppError("Could not record the vote. Please try again.", 503)

    current_app.logger.info(
        f"Player {voter_id} voted for {candidate_id} in team {team_id}."
    )
    return jsonify(leader=repos.votes.get_current_leader(team_id)), 201


@bp.route("/teams/<int:team_id>/votes")
def vote_summary(team_id):
    """Current tally, leader and turnout for a team's election."""
    votes = repositories().votes
    counts = votes.get_vote_counts(team_id)
    return jsonify(
        counts=[
            {"candidateId": candidate, "votes": total}
            for candidate, total in counts.items()
        ],
        leader=next(iter(counts), None),
        stats=votes.get_voting_stats(team_id),
    )


@bp.route("/organizers/login", methods=["POST"])
def organizer_login():
    """Check organizer credentials."""
    payload = request.get_json(silent=True) or {}
    username = payload.get("username")
    password = payload.get("password")
    if not username or not password:
        raise ValidationError("Username and password are required.")

    organizer = repositories().organizers.authenticate(username, password)
    if organizer is None:
        raise AuthenticationError()
    return jsonify(organizer.public_dict())
