"""
Writes every player, team, tournament and match to one JSON file.

- Reads the database location and credentials the same way the app does.
- Takes the output path as its only argument (default "arena_export.json").
- The file can be read back with JsonExportService.import_all.
"""

import sys
from pathlib import Path

# Add the project root to the Python path to allow importing 'arena'
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from arena import create_app, repositories  # noqa: E402
from arena.exports import collect_export  # noqa: E402

DEFAULT_EXPORT_PATH = "arena_export.json"


def export_data(repos, path):
    """Export a full snapshot to path and return True on success."""
    data = collect_export(repos)
    if not repos.exports.export_all(data, path):
        print(f"Could not export data to {path}.")
        return False
    print(
        f"Exported {len(data.players)} players, {len(data.teams)} teams, "
        f"{len(data.tournaments)} tournaments and {len(data.matches)} matches "
        f"to {path}."
    )
    return True


def main(argv=None):
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv
    path = args[0] if args else DEFAULT_EXPORT_PATH
    app = create_app()
    try:
        repos = repositories(app)
    except RuntimeError as e:
        print(f"Error: {e} Set FIREBASE_DATABASE_URL first.")
        return 1

    ok = export_data(repos, path)
    repos.client.close()
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
