from typing import List, Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from textsafe.adapter.repositories.errors import translate_store_errors
from textsafe.app.repositories.text_repository import ITextRepository
from textsafe.domain.entities import EncryptedText


class TextRepository(ITextRepository):
    """Encrypted text repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_store_errors
    async def list_by_user(self, user_id: int) -> List[EncryptedText]:
        """All texts of a user, most recently updated first"""
        stmt = (
            select(EncryptedText)
            .where(EncryptedText.user_id == user_id)
            .order_by(EncryptedText.updated_at.desc(), EncryptedText.id.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    @translate_store_errors
    async def get_for_user(self, text_id: int, user_id: int) -> Optional[EncryptedText]:
        """Get a text only if it belongs to the user"""
        stmt = select(EncryptedText).where(
            EncryptedText.id == text_id, EncryptedText.user_id == user_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_store_errors
    async def create(self, text: EncryptedText) -> EncryptedText:
        """Create a new text"""
        self.session.add(text)
        await self.session.flush()
        await self.session.refresh(text)
        return text

    @translate_store_errors
    async def update_for_user(
        self, text: EncryptedText, user_id: int
    ) -> Optional[EncryptedText]:
        """Copy encrypted fields onto the stored row if the user owns it"""
        existing = await self.get_for_user(text.id, user_id)
        if existing is None:
            return None

        existing.encrypted_content = text.encrypted_content
        existing.iv = text.iv
        existing.encrypted_name = text.encrypted_name
        existing.name_iv = text.name_iv
        existing.updated_at = text.updated_at

        self.session.add(existing)
        await self.session.flush()
        await self.session.refresh(existing)
        return existing

    @translate_store_errors
    async def delete_for_user(self, text_id: int, user_id: int) -> bool:
        """Delete a text only if it belongs to the user"""
        stmt = delete(EncryptedText).where(
            EncryptedText.id == text_id, EncryptedText.user_id == user_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
