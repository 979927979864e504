"""
Create Text Use Case
"""

from textsafe.app.services.encryption_service import EncryptionService
from textsafe.app.services.input_validation import (
    MAX_CONTENT_LENGTH,
    MAX_NAME_LENGTH,
    sanitize_input,
)
from textsafe.app.services.unit_of_work import UnitOfWork
from textsafe.domain.entities import EncryptedText, ErrorCode
from textsafe.libs.result import Error, Result, Return
from .dtos import CreateTextCommand, TextCreated


class CreateTextUseCase:
    """
    Use case for storing a new text.

    Business Logic:
    1. Sanitize content (and name, when given)
    2. Encrypt each with its own IV
    3. Insert owned by the authenticated user
    """

    def __init__(self, uow: UnitOfWork, encryption: EncryptionService):
        self.uow = uow
        self.encryption = encryption

    async def execute(self, command: CreateTextCommand, user_id: int) -> Result[TextCreated]:
        if not command.content:
            return Return.err(Error(ErrorCode.VALIDATION_ERROR, "Content is required"))

        try:
            content = sanitize_input(command.content, MAX_CONTENT_LENGTH)
            name = None
            if command.name and command.name.strip():
                name = sanitize_input(command.name.strip(), MAX_NAME_LENGTH)
        except ValueError as exc:
            return Return.err(Error(ErrorCode.VALIDATION_ERROR, str(exc)))

        encrypted_content = self.encryption.encrypt(content)
        text = EncryptedText(
            user_id=user_id,
            encrypted_content=encrypted_content.ciphertext,
            iv=encrypted_content.iv,
        )
        if name is not None:
            encrypted_name = self.encryption.encrypt(name)
            text.encrypted_name = encrypted_name.ciphertext
            text.name_iv = encrypted_name.iv

        async with self.uow:
            text = await self.uow.texts.create(text)
            await self.uow.commit()
            return Return.ok(
                TextCreated(id=text.id, created_at=text.created_at, updated_at=text.updated_at)
            )
