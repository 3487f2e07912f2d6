#!/usr/bin/env python3
"""
Script to create two demo users for trying the friend request routes.
Run this script once against a fresh database.
"""

import asyncio
import sys
from pathlib import Path

# Add the project root to the Python path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from friend_api.core.database import db, USERS_COLLECTION
from friend_api.core.errors import AppError, ConflictError
from friend_api.models.user import UserCreate
from friend_api.services.user_service import UserService
from friend_api.stores.user_store import UserStore
from friend_api.utils.logging import get_logger

logger = get_logger("seed_users")

DEMO_USERS = [
    UserCreate(pseudo="alice", email="alice@example.com", password="alice123"),
    UserCreate(pseudo="bob", email="bob@example.com", password="bob123"),
]


async def seed_users():
    user_store = UserStore(db[USERS_COLLECTION])
    await user_store.ensure_indexes()
    service = UserService(user_store)

    for payload in DEMO_USERS:
        try:
            await service.create_user(payload)
            logger.info(f"Created user {payload.pseudo}")
        except ConflictError:
            logger.info(f"User {payload.pseudo} already exists")


async def main():
    logger.info("Creating demo users...")
    try:
        await seed_users()
    except AppError as e:
        logger.error(f"Error creating users: {e.message}")
        logger.error("Make sure your MongoDB connection is working and .env file is configured.")
        sys.exit(1)
    logger.info("Demo users ready. Try POST /api/v1/friend-requests/create")


if __name__ == "__main__":
    asyncio.run(main())
