"""
User service for database operations.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from diary_api.models.contact import Contact
from diary_api.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    """Service for user-related database operations."""

    async def get_user_by_id(self, user_id: UUID, db: AsyncSession) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User's UUID
            db: Database session

        Returns:
            User row or None if not found
        """
        result = await db.execute(select(User).where(User.user_id == user_id))
        return result.scalar_one_or_none()

    async def get_user_by_email(self, email: str, db: AsyncSession) -> Optional[User]:
        """
        Get user by email.

        Args:
            email: User's email address
            db: Database session

        Returns:
            User row or None if not found
        """
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def create_user(
        self,
        email: str,
        nickname: str,
        db: AsyncSession,
        password_hash: Optional[str] = None,
        name: Optional[str] = None,
    ) -> User:
        """Create a new user; password_hash is None for Google sign-ups."""
        user = User(
            email=email,
            nickname=nickname,
            password_hash=password_hash,
            name=name,
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user

    async def update_profile(
        self,
        user: User,
        fields: Dict[str, Optional[str]],
        db: AsyncSession,
    ) -> User:
        """Apply nickname/name changes to a loaded user."""
        for key in ("nickname", "name"):
            if key in fields:
                setattr(user, key, fields[key])

        await db.commit()
        await db.refresh(user)
        return user

    async def update_preferences(
        self,
        user: User,
        db: AsyncSession,
        timer_status: Optional[str] = None,
        timer_idle_threshold_sec: Optional[int] = None,
    ) -> User:
        if timer_status is not None:
            user.timer_status = timer_status
        if timer_idle_threshold_sec is not None:
            user.timer_idle_threshold_sec = timer_idle_threshold_sec

        await db.commit()
        await db.refresh(user)
        return user

    async def touch_last_active(self, user_id: UUID, db: AsyncSession) -> None:
        """
        Record activity for the inactivity timer.

        Failures are logged and swallowed: activity tracking must never fail
        the request that triggered it.
        """
        try:
            user = await self.get_user_by_id(user_id, db)
            if user is None:
                return
            user.last_active_at = datetime.utcnow()
            await db.commit()
        except Exception:
            logger.exception("Failed to update last_active_at for user %s", user_id)
            await db.rollback()

    async def delete_user(self, user_id: UUID, db: AsyncSession) -> bool:
        """
        Delete a user together with their diaries and contacts.

        Args:
            user_id: User's UUID
            db: Database session

        Returns:
            True if deleted, False if not found
        """
        user = await self.get_user_by_id(user_id, db)

        if not user:
            return False

        await db.delete(user)
        await db.commit()
        return True

    async def list_contacts(self, user_id: UUID, db: AsyncSession) -> List[Contact]:
        result = await db.execute(select(Contact).where(Contact.user_id == user_id))
        return list(result.scalars().all())

    async def replace_contacts(
        self,
        user_id: UUID,
        contacts: List[Dict[str, Optional[str]]],
        db: AsyncSession,
    ) -> List[Contact]:
        """Delete the user's contacts and insert the given list in one commit."""
        await db.execute(delete(Contact).where(Contact.user_id == user_id))

        rows = [
            Contact(user_id=user_id, email=item.get("email"), phone=item.get("phone"))
            for item in contacts
        ]
        db.add_all(rows)
        await db.commit()

        for row in rows:
            await db.refresh(row)
        return rows
