from datetime import datetime
from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from textsafe.adapter.repositories.errors import translate_store_errors
from textsafe.app.repositories.user_repository import IUserRepository
from textsafe.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_store_errors
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by exact username"""
        stmt = select(User).where(User.username == username)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_store_errors
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_store_errors
    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    @translate_store_errors
    async def update_login_state(
        self,
        user_id: int,
        failed_login_attempts: int,
        locked_until: Optional[datetime],
        last_login: Optional[datetime] = None,
    ) -> None:
        """Write lockout counters, and last_login when given"""
        user = await self.session.get(User, user_id)
        if user is None:
            return

        user.failed_login_attempts = failed_login_attempts
        user.locked_until = locked_until
        if last_login is not None:
            user.last_login = last_login

        self.session.add(user)
        await self.session.flush()

    @translate_store_errors
    async def exists_any(self) -> bool:
        stmt = select(User.id).limit(1)
        result = await self.session.exec(stmt)
        return result.first() is not None
