"""
Cleanup Expired Sessions Use Case

Sweeps sessions whose expiry has passed.
"""

import logging
from datetime import datetime
from typing import Callable

from textsafe.app.services.unit_of_work import UnitOfWork
from textsafe.domain.base import utcnow

logger = logging.getLogger(__name__)


class CleanupExpiredSessionsUseCase:
    """
    Use case for deleting expired sessions.

    Safe to run repeatedly and concurrently: a second pass simply finds
    nothing left to delete.
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(self) -> int:
        """Returns the number of sessions deleted"""
        async with self.uow:
            deleted = await self.uow.sessions.delete_expired(self.clock())
            await self.uow.commit()

        logger.info(f"Removed {deleted} expired session(s)")
        return deleted
