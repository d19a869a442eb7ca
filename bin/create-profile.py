"""Create a profile and print its id.

Usage: uv run python bin/create-profile.py <name>
"""

import asyncio
import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from pydantic import ValidationError

from shared.db import Database, SqliteGameRepository, SqliteProfileRepository
from shared.storage import LocalPictureStorage
from tracker.profiles.service import ProfileService
from tracker.server.settings import TrackerServerSettings


async def main() -> None:
    if len(sys.argv) != 2:
        print(f"Usage: {sys.argv[0]} <name>")
        sys.exit(1)

    settings = TrackerServerSettings()
    db = Database(settings.database_path)
    db.connect()

    try:
        service = ProfileService(
            SqliteProfileRepository(db),
            SqliteGameRepository(db),
            LocalPictureStorage(settings.picture_dir),
        )
        try:
            profile = await service.create_profile(sys.argv[1])
        except ValidationError as e:
            print(f"Error: {e.errors()[0]['msg']}")
            sys.exit(1)

        print(f"Profile created: {profile.name} (id: {profile.profile_id})")
    finally:
        db.close()


if __name__ == "__main__":
    asyncio.run(main())
