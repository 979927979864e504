"""
Logout Use Case

Deletes the session behind a token.
"""

import logging
from typing import Optional

from textsafe.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for ending a session.

    Business Rules:
    - Idempotent: an unknown or already deleted token is a no-op
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_token: Optional[str]) -> None:
        if not session_token:
            return

        async with self.uow:
            deleted = await self.uow.sessions.delete_by_token(session_token)
            await self.uow.commit()

        if deleted:
            logger.info("Session deleted on logout")
