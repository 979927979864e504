"""
Session Entity

Opaque login sessions carried by the session cookie.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, Integer
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from textsafe.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - one row per successful login.

    Business Rules:
    - session_token is 32 random bytes, hex encoded
    - expires_at is created_at + 24 hours and never extended
    - Expired rows stay until a cleanup pass deletes them
    - ip_address and user_agent are audit metadata only
    """

    __tablename__ = "sessions"

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    session_token: str = Field(unique=True, index=True, max_length=64)
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_session_expires_at", "expires_at"),)
