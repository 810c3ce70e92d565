"""User repository for database operations."""

from typing import Dict, Iterable, Optional
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.user import User


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_user(self, user_data: dict) -> User:
        """Create new user."""
        user = User(**user_data)
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (lowercased) email."""
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def exists_with_email_or_username(self, email: str, username: str) -> bool:
        """Check whether either identifier is already registered."""
        stmt = select(User.id).where(or_(User.email == email, User.username == username)).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_usernames(self, user_ids: Iterable[UUID]) -> Dict[UUID, str]:
        """Map user ids to usernames in one query."""
        ids = set(user_ids)
        if not ids:
            return {}
        stmt = select(User.id, User.username).where(User.id.in_(ids))
        result = await self.session.execute(stmt)
        return {row.id: row.username for row in result}
