"""
Text Use Case DTOs

Commands and responses for encrypted text management.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class CreateTextCommand(BaseModel):
    content: str
    name: Optional[str] = None


class UpdateTextCommand(BaseModel):
    name: str
    content: str


class TextDetail(BaseModel):
    """A decrypted text"""

    id: int
    name: str
    content: str
    created_at: datetime
    updated_at: datetime


class TextList(BaseModel):
    texts: List[TextDetail]


class TextCreated(BaseModel):
    id: int
    created_at: datetime
    updated_at: datetime


class TextUpdated(BaseModel):
    id: int
    updated_at: datetime
