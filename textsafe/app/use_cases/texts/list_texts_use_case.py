"""
List Texts Use Case
"""

import logging

from textsafe.app.services.encryption_service import DecryptionError, EncryptionService
from textsafe.app.services.unit_of_work import UnitOfWork
from textsafe.domain.entities import EncryptedText
from textsafe.libs.result import Result, Return
from .dtos import TextDetail, TextList
from .get_text_use_case import decrypt_name

logger = logging.getLogger(__name__)

DECRYPTION_ERROR_PLACEHOLDER = "[Decryption Error]"


class ListTextsUseCase:
    """
    Use case for listing the user's texts, decrypted.

    Business Rules:
    - Only the user's own texts, most recently updated first
    - A text that fails to decrypt is listed with a placeholder body
      instead of failing the whole listing
    """

    def __init__(self, uow: UnitOfWork, encryption: EncryptionService):
        self.uow = uow
        self.encryption = encryption

    async def execute(self, user_id: int) -> Result[TextList]:
        async with self.uow:
            rows = await self.uow.texts.list_by_user(user_id)
            texts = [self._to_detail(row) for row in rows]

        return Return.ok(TextList(texts=texts))

    def _to_detail(self, row: EncryptedText) -> TextDetail:
        try:
            content = self.encryption.decrypt(row.encrypted_content, row.iv)
        except DecryptionError:
            logger.error(f"Decryption error for text id={row.id}")
            content = DECRYPTION_ERROR_PLACEHOLDER

        return TextDetail(
            id=row.id,
            name=decrypt_name(self.encryption, row),
            content=content,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
