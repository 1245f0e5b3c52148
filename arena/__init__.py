"""Initialize the Flask app and the realtime database layer."""

import datetime
import json
import os

from firebase_admin import credentials
from flask import Flask

from .extensions import repositories, store

TOKEN_EXPIRY_MARGIN = datetime.timedelta(minutes=5)


def _env_float(name, default):
    value = os.environ.get(name)
    return float(value) if value else default


def _load_credentials(app):
    """Find service-account credentials in the environment or on disk."""
    # First, try to load from environment variable (for production)
    cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        try:
            return credentials.Certificate(json.loads(cred_json))
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

    # If env var fails or is not present, try loading from file (for local dev)
    cred_path = os.path.join(
        os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
    )
    if os.path.exists(cred_path):
        try:
            return credentials.Certificate(cred_path)
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error loading credentials from file: {e}")
    return None


def _utcnow():
    """Naive UTC now, comparable with the expiry google-auth reports."""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


def _access_token_provider(cred):
    """Return a callable yielding a valid OAuth2 token for the database.

    get_access_token() refreshes on every call, so the token is cached until
    shortly before it expires.
    """
    cache = {}

    def token():
        info = cache.get("info")
        renew_at = _utcnow() + TOKEN_EXPIRY_MARGIN
        if info is None or (info.expiry is not None and info.expiry <= renew_at):
            info = cache["info"] = cred.get_access_token()
        return info.access_token

    return token


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        FIREBASE_DATABASE_URL=os.environ.get("FIREBASE_DATABASE_URL"),
        FIREBASE_AUTH_TOKEN=os.environ.get("FIREBASE_AUTH_TOKEN") or None,
        FIREBASE_AUTH_PARAM="auth",
        STORE_TIMEOUT=_env_float("STORE_TIMEOUT", 10.0),
        STORE_MAX_ATTEMPTS=int(os.environ.get("STORE_MAX_ATTEMPTS") or 5),
        STORE_RETRY_DELAY=_env_float("STORE_RETRY_DELAY", 0.05),
    )

    if test_config:
        app.config.update(test_config)

    # Without a database secret, fall back to service-account OAuth tokens
    if not app.config.get("TESTING") and not app.config["FIREBASE_AUTH_TOKEN"]:
        cred = _load_credentials(app)
        if cred:
            app.config["FIREBASE_AUTH_TOKEN"] = _access_token_provider(cred)
            app.config["FIREBASE_AUTH_PARAM"] = "access_token"
        else:
            app.logger.info("No database credentials found; using unauthenticated access.")

    store.init_app(app)

    # Register blueprints
    from . import api as api_bp

    app.register_blueprint(api_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    @app.route("/health")
    def health_check():
        """Perform a simple health check."""
        return "OK", 200

    return app


__all__ = ["create_app", "repositories", "store"]
