"""
Login Use Case

Verifies credentials, maintains the lockout counters and issues a session.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Callable, Optional

from textsafe.app.services.password_hasher import PasswordHasher
from textsafe.app.services.unit_of_work import UnitOfWork
from textsafe.domain.base import generate_session_token, utcnow
from textsafe.domain.entities import ErrorCode, Session
from textsafe.libs.result import Error, Result, Return
from .dtos import LoginResult, UserInfo

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class LoginUseCase:
    """
    Use case for user login and session issuance.

    Business Rules:
    - Unknown username and wrong password fail identically (INVALID_CREDENTIALS)
    - A locked account fails with ACCOUNT_LOCKED before the password is checked
    - Each wrong password increments failed_login_attempts; reaching
      max_failed_attempts locks the account for lockout_duration
    - Waiting out a lockout does not reset the counter, only a success does
    - Success resets the counters, stamps last_login and creates a session
      expiring after session_ttl
    - Every write is committed before execute() returns
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: PasswordHasher,
        max_failed_attempts: int = 5,
        lockout_duration: timedelta = timedelta(minutes=15),
        session_ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.max_failed_attempts = max_failed_attempts
        self.lockout_duration = lockout_duration
        self.session_ttl = session_ttl
        self.clock = clock

    async def execute(
        self,
        username: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[LoginResult]:
        """
        Execute login use case.

        Args:
            username: Exact username
            password: Plain text password
            ip_address: Client address, stored on the session for audit
            user_agent: Client user agent, stored on the session for audit

        Returns:
            Result with LoginResult (user identity and session token), or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_username(username)

            if user is None:
                # Keep timing close to the wrong-password path
                self.password_hasher.verify_dummy(password)
                return Return.err(
                    Error(ErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
                )

            now = self.clock()

            if user.is_locked(now):
                remaining_minutes = math.ceil(
                    (user.locked_until - now).total_seconds() / 60
                )
                logger.warning(f"Login rejected for locked account id={user.id}")
                return Return.err(
                    Error(
                        ErrorCode.ACCOUNT_LOCKED,
                        f"Account is locked. Please try again in {remaining_minutes} minutes.",
                        {"remaining_minutes": remaining_minutes},
                    )
                )

            if not self.password_hasher.verify(password, user.password_hash):
                failed_attempts = (user.failed_login_attempts or 0) + 1
                locked_until = None
                if failed_attempts >= self.max_failed_attempts:
                    locked_until = now + self.lockout_duration
                    logger.warning(
                        f"Account id={user.id} locked after {failed_attempts} failed attempts"
                    )

                await self.uow.users.update_login_state(
                    user.id,
                    failed_login_attempts=failed_attempts,
                    locked_until=locked_until,
                )
                await self.uow.commit()

                return Return.err(
                    Error(ErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
                )

            await self.uow.users.update_login_state(
                user.id,
                failed_login_attempts=0,
                locked_until=None,
                last_login=now,
            )

            session_token = generate_session_token()
            session = Session(
                user_id=user.id,
                session_token=session_token,
                expires_at=now + self.session_ttl,
                ip_address=ip_address,
                user_agent=user_agent,
                created_at=now,
            )
            await self.uow.sessions.create(session)

            await self.uow.commit()
            logger.info(f"User id={user.id} logged in")

            return Return.ok(
                LoginResult(
                    user=UserInfo(id=user.id, username=user.username),
                    session_token=session_token,
                )
            )
