from abc import ABC, abstractmethod
from typing import List, Optional

from textsafe.domain.entities import EncryptedText


class ITextRepository(ABC):
    """Encrypted text repository interface - every method is owner-scoped"""

    @abstractmethod
    async def list_by_user(self, user_id: int) -> List[EncryptedText]:
        """All texts of a user, most recently updated first"""
        pass

    @abstractmethod
    async def get_for_user(self, text_id: int, user_id: int) -> Optional[EncryptedText]:
        """Get a text only if it belongs to the user"""
        pass

    @abstractmethod
    async def create(self, text: EncryptedText) -> EncryptedText:
        """Create a new text"""
        pass

    @abstractmethod
    async def update_for_user(self, text: EncryptedText, user_id: int) -> Optional[EncryptedText]:
        """Update a text only if it belongs to the user"""
        pass

    @abstractmethod
    async def delete_for_user(self, text_id: int, user_id: int) -> bool:
        """Delete a text only if it belongs to the user. Returns True if deleted."""
        pass
