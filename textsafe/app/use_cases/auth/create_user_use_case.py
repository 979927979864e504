"""
Create User Use Case

Provisions the account from externally supplied credentials.
"""

import logging

from textsafe.app.services.input_validation import validate_password, validate_username
from textsafe.app.services.password_hasher import PasswordHasher
from textsafe.app.services.unit_of_work import UnitOfWork
from textsafe.domain.entities import ErrorCode, User
from textsafe.libs.result import Error, Result, Return
from .dtos import CreateUserCommand, UserInfo

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """
    Create User Use Case

    Business Logic:
    1. Validate username charset and length
    2. Validate password strength (skipped for operator-provisioned credentials)
    3. Reject an existing username (USERNAME_TAKEN)
    4. Hash password with bcrypt and insert the user
    """

    def __init__(self, uow: UnitOfWork, password_hasher: PasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    async def execute(
        self, command: CreateUserCommand, enforce_password_policy: bool = True
    ) -> Result[UserInfo]:
        """
        Execute create user use case

        Args:
            command: CreateUserCommand with username and plain password
            enforce_password_policy: apply the complexity rules to the password

        Returns:
            Result[UserInfo] or Error(VALIDATION_ERROR | USERNAME_TAKEN)
        """
        if not validate_username(command.username):
            return Return.err(
                Error(
                    ErrorCode.VALIDATION_ERROR,
                    "Username must be 3-255 characters of A-Z, a-z, 0-9, +, /, =",
                )
            )

        if not command.password:
            return Return.err(Error(ErrorCode.VALIDATION_ERROR, "Password is required"))

        if enforce_password_policy:
            violations = validate_password(command.password)
            if violations:
                return Return.err(Error(ErrorCode.VALIDATION_ERROR, violations[0]))

        async with self.uow:
            existing_user = await self.uow.users.get_by_username(command.username)
            if existing_user:
                return Return.err(
                    Error(ErrorCode.USERNAME_TAKEN, "Username already exists")
                )

            user = User(
                username=command.username,
                password_hash=self.password_hasher.hash(command.password),
            )
            user = await self.uow.users.create(user)
            await self.uow.commit()

            logger.info(f"Created user id={user.id}")
            return Return.ok(UserInfo(id=user.id, username=user.username))
