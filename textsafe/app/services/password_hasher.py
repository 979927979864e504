from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """Slow, salted one-way password hashing"""

    @abstractmethod
    def hash(self, password: str) -> str:
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """False for a wrong password or a malformed stored hash"""
        pass

    @abstractmethod
    def verify_dummy(self, password: str) -> None:
        """Spend one comparison against a throwaway hash (unknown-user path)"""
        pass
