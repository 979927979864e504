"""
Update Text Use Case
"""

from datetime import datetime
from typing import Callable

from textsafe.app.services.encryption_service import EncryptionService
from textsafe.app.services.input_validation import (
    MAX_CONTENT_LENGTH,
    MAX_NAME_LENGTH,
    sanitize_input,
)
from textsafe.app.services.unit_of_work import UnitOfWork
from textsafe.domain.base import utcnow
from textsafe.domain.entities import EncryptedText, ErrorCode
from textsafe.libs.result import Error, Result, Return
from .dtos import TextUpdated, UpdateTextCommand


class UpdateTextUseCase:
    """
    Use case for replacing a text's name and content.

    Business Rules:
    - Name and content are both required
    - Fresh IVs are generated on every update
    - Texts of other users are reported as not found
    """

    def __init__(
        self,
        uow: UnitOfWork,
        encryption: EncryptionService,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.encryption = encryption
        self.clock = clock

    async def execute(
        self, text_id: int, command: UpdateTextCommand, user_id: int
    ) -> Result[TextUpdated]:
        if not command.name or not command.name.strip():
            return Return.err(Error(ErrorCode.VALIDATION_ERROR, "File name is required"))
        if not command.content:
            return Return.err(Error(ErrorCode.VALIDATION_ERROR, "Content is required"))

        try:
            content = sanitize_input(command.content, MAX_CONTENT_LENGTH)
            name = sanitize_input(command.name.strip(), MAX_NAME_LENGTH)
        except ValueError as exc:
            return Return.err(Error(ErrorCode.VALIDATION_ERROR, str(exc)))

        encrypted_content = self.encryption.encrypt(content)
        encrypted_name = self.encryption.encrypt(name)
        changes = EncryptedText(
            id=text_id,
            user_id=user_id,
            encrypted_content=encrypted_content.ciphertext,
            iv=encrypted_content.iv,
            encrypted_name=encrypted_name.ciphertext,
            name_iv=encrypted_name.iv,
            updated_at=self.clock(),
        )

        async with self.uow:
            text = await self.uow.texts.update_for_user(changes, user_id)
            if text is None:
                return Return.err(Error(ErrorCode.TEXT_NOT_FOUND, "Text not found"))
            await self.uow.commit()
            return Return.ok(TextUpdated(id=text.id, updated_at=text.updated_at))
