"""
Use Cases

Organized by domain folder:
- auth/: Authentication and session lifecycle
- texts/: Encrypted text management
- system/: Initialization
"""

from .auth import (
    LoginUseCase,
    VerifySessionUseCase,
    LogoutUseCase,
    CleanupExpiredSessionsUseCase,
    CreateUserUseCase,
)
from .texts import (
    ListTextsUseCase,
    GetTextUseCase,
    CreateTextUseCase,
    UpdateTextUseCase,
    DeleteTextUseCase,
)
from .system import InitializeUseCase

__all__ = [
    # Auth
    "LoginUseCase",
    "VerifySessionUseCase",
    "LogoutUseCase",
    "CleanupExpiredSessionsUseCase",
    "CreateUserUseCase",
    # Texts
    "ListTextsUseCase",
    "GetTextUseCase",
    "CreateTextUseCase",
    "UpdateTextUseCase",
    "DeleteTextUseCase",
    # System
    "InitializeUseCase",
]
