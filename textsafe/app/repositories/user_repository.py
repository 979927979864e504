from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from textsafe.domain.entities import User


class IUserRepository(ABC):
    """Credential store interface - application layer"""

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by exact username"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user (password already hashed)"""
        pass

    @abstractmethod
    async def update_login_state(
        self,
        user_id: int,
        failed_login_attempts: int,
        locked_until: Optional[datetime],
        last_login: Optional[datetime] = None,
    ) -> None:
        """Persist lockout counters; last_login is only written when given"""
        pass

    @abstractmethod
    async def exists_any(self) -> bool:
        """True if at least one user has been created"""
        pass
