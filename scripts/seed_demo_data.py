#!/usr/bin/env python3
"""
Seed the demo account on the configured storage backend

Creates demo_user / demo@example.com (password "password") if missing and
fills its recommendation feed with the sample items. Run from the project
root so MONGODB_URI and friends are picked up from .env.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.auth import hash_password  # noqa: E402
from core.logging import logger  # noqa: E402
from database import init_storage  # noqa: E402
from database.entities import NewUser  # noqa: E402
from database.repository import StorageRepository  # noqa: E402
from services.recommendation_service import seed_sample_recommendations  # noqa: E402
from services.sample_data import DEMO_USER  # noqa: E402


def seed_demo_data(storage: StorageRepository) -> str:
    """Create the demo user if needed and seed its feed; returns the user id"""
    user = storage.get_user_by_email(DEMO_USER["email"])
    if user:
        logger.info(f"ℹ️  Demo user already exists ({user.id})")
    else:
        user = storage.create_user(NewUser(
            username=DEMO_USER["username"],
            email=DEMO_USER["email"],
            password=hash_password(DEMO_USER["password"]),
            full_name=DEMO_USER["full_name"]
        ))
        logger.info(f"✅ Demo user created ({user.id})")

    feed = seed_sample_recommendations(storage, user.id)
    logger.info(f"✅ Demo feed has {len(feed)} recommendations")
    return user.id


if __name__ == "__main__":
    storage = init_storage()
    if storage.backend_name == "memory":
        logger.warning("⚠️ MONGODB_URI not set - seeding the in-memory store, data is lost on exit")
    seed_demo_data(storage)
