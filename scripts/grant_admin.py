"""Register an existing identity account as an admin (writes admin/{uid}).

Usage:
    python -m scripts.grant_admin <uid> <email>
Use when no admin exists yet and ADMIN_REGISTRATION_SECRET is not shared.
All imports use app.*.
"""

import asyncio
import sys

import httpx

from app.application.collections import admin_path
from app.core.config import get_settings
from app.infrastructure.firebase import init_firebase


async def main() -> None:
    """Mirror {id, email} under admin/; the uid must already exist in Firebase Authentication."""
    if len(sys.argv) < 3:
        print("Usage: python -m scripts.grant_admin <uid> <email>", file=sys.stderr)
        sys.exit(1)
    uid, email = sys.argv[1], sys.argv[2]

    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        firebase = init_firebase(settings, client)
        path = admin_path(uid)
        if await firebase.database.get(path) is not None:
            print(f"Already an admin: {uid}")
            return
        await firebase.database.set(path, {"id": uid, "email": email})
        print(f"Granted admin: {uid} ({email})")


if __name__ == "__main__":
    asyncio.run(main())
