"""
User Entity

The single account allowed to store texts.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from textsafe.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity - owner of encrypted texts and sessions.

    Business Rules:
    - Username must be unique, 3-255 chars of [A-Za-z0-9+/=]
    - Password stored as bcrypt hash (cost factor 12), never plaintext
    - failed_login_attempts resets to 0 only on a successful login
    - locked_until is set for 15 minutes once failures reach 5
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=255)

    # Lockout state
    failed_login_attempts: int = Field(default=0)
    locked_until: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    def is_locked(self, now: datetime) -> bool:
        return self.locked_until is not None and self.locked_until > now
