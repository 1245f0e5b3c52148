"""
Creates the default organizer account if it does not exist yet.

- Reads the database location and credentials the same way the app does
  (FIREBASE_DATABASE_URL, FIREBASE_AUTH_TOKEN or FIREBASE_CREDENTIALS_JSON).
- Looks up the organizer named ADMIN_USERNAME (default "admin").
- Creates it with ADMIN_PASSWORD / ADMIN_EMAIL when missing; the password is
  stored hashed.
"""

import os
import sys
from pathlib import Path

# Add the project root to the Python path to allow importing 'arena'
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from arena import create_app, repositories  # noqa: E402
from arena.core.constants import (  # noqa: E402
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USERNAME,
    FAILED_ID,
)
from arena.organizers.models import Organizer  # noqa: E402


def ensure_admin(organizers, username, password, email):
    """Return the admin's id, creating the account if needed, or None on failure."""
    existing = organizers.get_by_username(username)
    if existing is not None:
        print(f"Organizer '{username}' already exists (id {existing.id}).")
        return existing.id

    admin = Organizer(
        username=username,
        password=password,
        email=email,
        full_name="System Administrator",
    )
    admin_id = organizers.create(admin)
    if admin_id == FAILED_ID:
        print(f"Could not create organizer '{username}'.")
        return None
    print(f"Created organizer '{username}' with id {admin_id}.")
    return admin_id


def main():
    """Main entry point."""
    app = create_app()
    try:
        repos = repositories(app)
    except RuntimeError as e:
        print(f"Error: {e} Set FIREBASE_DATABASE_URL first.")
        return 1

    admin_id = ensure_admin(
        repos.organizers,
        os.environ.get("ADMIN_USERNAME") or DEFAULT_ADMIN_USERNAME,
        os.environ.get("ADMIN_PASSWORD") or DEFAULT_ADMIN_PASSWORD,
        os.environ.get("ADMIN_EMAIL") or DEFAULT_ADMIN_EMAIL,
    )
    repos.client.close()
    return 0 if admin_id is not None else 1


if __name__ == "__main__":
    sys.exit(main())
