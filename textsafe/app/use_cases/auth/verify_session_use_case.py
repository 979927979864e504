"""
Verify Session Use Case

Resolves a session token to its user.
"""

from datetime import datetime
from typing import Callable, Optional

from textsafe.app.services.unit_of_work import UnitOfWork
from textsafe.domain.base import utcnow
from .dtos import UserInfo


class VerifySessionUseCase:
    """
    Use case for checking a session token.

    Business Rules:
    - Empty, unknown and expired tokens all yield None (no error)
    - Expiry is checked here on every call; expired rows may still exist
    - Never extends the session (no sliding expiration)
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(self, session_token: Optional[str]) -> Optional[UserInfo]:
        if not session_token:
            return None

        async with self.uow:
            user = await self.uow.sessions.find_active_user_by_token(
                session_token, self.clock()
            )
            if user is None:
                return None
            # rows expire once the block rolls back
            return UserInfo(id=user.id, username=user.username)
