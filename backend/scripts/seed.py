#!/usr/bin/env python3
"""
Seed a development database with a test account, two diaries and a contact.
Run from backend directory: python scripts/seed.py [--reset]
"""
import asyncio
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import delete

from diary_api.core.constants import TimerStatus
from diary_api.core.database import Base, SessionLocal, engine
from diary_api.core.passwords import hash_password
from diary_api.models import Contact, Diary, User

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "testpassword123"


async def seed(reset: bool = False):
    """Create tables if needed and insert the fixture rows."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as session:
        if reset:
            await session.execute(delete(Diary))
            await session.execute(delete(Contact))
            await session.execute(delete(User))
            await session.commit()
            print("Existing data cleaned.")

        user = User(
            email=TEST_EMAIL,
            password_hash=hash_password(TEST_PASSWORD),
            nickname="Test User",
            timer_status=TimerStatus.INACTIVE,
        )
        session.add(user)
        await session.flush()

        session.add_all([
            Diary(user_id=user.user_id, content="This is my first test diary entry."),
            Diary(user_id=user.user_id, content="This is my second test diary entry."),
            Contact(user_id=user.user_id, email="contact@example.com", phone="010-1234-5678"),
        ])
        await session.commit()

        print(f"Test user created: {user.user_id} <{TEST_EMAIL}> / {TEST_PASSWORD}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed(reset="--reset" in sys.argv))
