from datetime import datetime
from typing import Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from textsafe.adapter.repositories.errors import translate_store_errors
from textsafe.app.repositories.session_repository import ISessionRepository
from textsafe.domain.entities import Session, User


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_store_errors
    async def create(self, session_obj: Session) -> Session:
        """Insert a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    @translate_store_errors
    async def find_active_user_by_token(
        self, session_token: str, now: datetime
    ) -> Optional[User]:
        """
        Join session to user, filtered by token and expires_at > now.

        Expired rows are excluded by the time condition, not by assuming
        cleanup already removed them.
        """
        stmt = (
            select(User)
            .join(Session, Session.user_id == User.id)
            .where(Session.session_token == session_token, Session.expires_at > now)
        )
        result = await self.session.exec(stmt)
        return result.first()

    @translate_store_errors
    async def delete_by_token(self, session_token: str) -> int:
        """Delete the session with this token"""
        stmt = delete(Session).where(Session.session_token == session_token)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    @translate_store_errors
    async def delete_expired(self, now: datetime) -> int:
        """Delete every session with expires_at <= now"""
        stmt = delete(Session).where(Session.expires_at <= now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
