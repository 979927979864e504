"""
Initialize Use Case

Idempotent startup routine: sweeps expired sessions and provisions the
single account from configured credentials.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from textsafe.app.services.password_hasher import PasswordHasher
from textsafe.app.services.unit_of_work import UnitOfWork
from textsafe.app.use_cases.auth import (
    CleanupExpiredSessionsUseCase,
    CreateUserCommand,
    CreateUserUseCase,
)
from textsafe.libs.result import Result, Return

logger = logging.getLogger(__name__)


class InitializeResult(BaseModel):
    expired_sessions_removed: int
    user_created: bool


class InitializeUseCase:
    """
    Use case for system initialization.

    Business Rules:
    - Expired sessions are removed on every run
    - The user is created only when no user exists yet
    - Missing default credentials are not an error; the user is simply
      not created until they are configured
    - Operator-supplied passwords bypass the complexity policy, the
      username must still be valid
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: PasswordHasher,
        default_username: Optional[str],
        default_password: Optional[str],
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.default_username = default_username
        self.default_password = default_password

    async def execute(self) -> Result[InitializeResult]:
        removed = await CleanupExpiredSessionsUseCase(self.uow).execute()

        async with self.uow:
            user_exists = await self.uow.users.exists_any()

        if user_exists:
            logger.info("User already exists, skipping creation")
            return Return.ok(
                InitializeResult(expired_sessions_removed=removed, user_created=False)
            )

        if not self.default_username or not self.default_password:
            logger.warning(
                "DEFAULT_USERNAME and DEFAULT_PASSWORD not set. User will not be created."
            )
            return Return.ok(
                InitializeResult(expired_sessions_removed=removed, user_created=False)
            )

        result = await CreateUserUseCase(self.uow, self.password_hasher).execute(
            CreateUserCommand(
                username=self.default_username, password=self.default_password
            ),
            enforce_password_policy=False,
        )
        if result.is_err():
            return Return.err(result.error)

        return Return.ok(
            InitializeResult(expired_sessions_removed=removed, user_created=True)
        )
