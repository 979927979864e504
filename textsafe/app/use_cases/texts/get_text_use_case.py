"""
Get Text Use Case
"""

import logging

from textsafe.app.services.encryption_service import DecryptionError, EncryptionService
from textsafe.app.services.unit_of_work import UnitOfWork
from textsafe.domain.entities import EncryptedText, ErrorCode
from textsafe.libs.result import Error, Result, Return
from .dtos import TextDetail

logger = logging.getLogger(__name__)


def decrypt_name(encryption: EncryptionService, text: EncryptedText) -> str:
    """Decrypted name, or "" when the text has none or it cannot be decrypted"""
    if not text.encrypted_name or not text.name_iv:
        return ""
    try:
        return encryption.decrypt(text.encrypted_name, text.name_iv)
    except DecryptionError:
        logger.error(f"Name decryption error for text id={text.id}")
        return ""


class GetTextUseCase:
    """Use case for reading one of the user's texts"""

    def __init__(self, uow: UnitOfWork, encryption: EncryptionService):
        self.uow = uow
        self.encryption = encryption

    async def execute(self, text_id: int, user_id: int) -> Result[TextDetail]:
        async with self.uow:
            text = await self.uow.texts.get_for_user(text_id, user_id)
            if text is None:
                return Return.err(Error(ErrorCode.TEXT_NOT_FOUND, "Text not found"))

            try:
                content = self.encryption.decrypt(text.encrypted_content, text.iv)
            except DecryptionError:
                logger.error(f"Decryption error for text id={text.id}")
                return Return.err(
                    Error(ErrorCode.DECRYPTION_FAILED, "Failed to decrypt text")
                )

            return Return.ok(
                TextDetail(
                    id=text.id,
                    name=decrypt_name(self.encryption, text),
                    content=content,
                    created_at=text.created_at,
                    updated_at=text.updated_at,
                )
            )
