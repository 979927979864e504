"""
Encrypted Text Use Cases

Create, read, update and delete texts owned by the authenticated user.
"""

from .dtos import (
    CreateTextCommand,
    UpdateTextCommand,
    TextCreated,
    TextDetail,
    TextList,
    TextUpdated,
)
from .list_texts_use_case import ListTextsUseCase
from .get_text_use_case import GetTextUseCase
from .create_text_use_case import CreateTextUseCase
from .update_text_use_case import UpdateTextUseCase
from .delete_text_use_case import DeleteTextUseCase

__all__ = [
    # Use Cases
    "ListTextsUseCase",
    "GetTextUseCase",
    "CreateTextUseCase",
    "UpdateTextUseCase",
    "DeleteTextUseCase",
    # DTOs - Commands
    "CreateTextCommand",
    "UpdateTextCommand",
    # DTOs - Responses
    "TextCreated",
    "TextDetail",
    "TextList",
    "TextUpdated",
]
