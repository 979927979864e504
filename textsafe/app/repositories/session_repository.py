from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from textsafe.domain.entities import Session, User


class ISessionRepository(ABC):
    """Session store interface - application layer"""

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Insert a new session"""
        pass

    @abstractmethod
    async def find_active_user_by_token(
        self, session_token: str, now: datetime
    ) -> Optional[User]:
        """Owner of the session with this token, if its expires_at > now"""
        pass

    @abstractmethod
    async def delete_by_token(self, session_token: str) -> int:
        """Delete the session with this token. Returns rows deleted (0 or 1)."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete every session with expires_at <= now. Returns rows deleted."""
        pass
