"""
EncryptedText Entity

A stored note or code snippet, encrypted at rest.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, Integer, Text
from sqlmodel import Column, DateTime, Field, SQLModel

from textsafe.domain.base import utcnow


class EncryptedText(SQLModel, table=True):
    """
    EncryptedText entity - content and optional name, each with its own IV.

    Business Rules:
    - Plaintext never touches the database
    - Every read and write is filtered by user_id
    """

    __tablename__ = "encrypted_texts"

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )

    encrypted_content: str = Field(sa_column=Column(Text, nullable=False))
    iv: str = Field(max_length=255)
    encrypted_name: Optional[str] = Field(default=None, sa_column=Column(Text))
    name_iv: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
