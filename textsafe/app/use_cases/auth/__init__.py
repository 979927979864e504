"""
Authentication Use Cases

Login, session verification, logout and user provisioning.
"""

from .dtos import CreateUserCommand, LoginResult, UserInfo
from .login_use_case import LoginUseCase
from .verify_session_use_case import VerifySessionUseCase
from .logout_use_case import LogoutUseCase
from .cleanup_expired_sessions_use_case import CleanupExpiredSessionsUseCase
from .create_user_use_case import CreateUserUseCase

__all__ = [
    # Use Cases
    "LoginUseCase",
    "VerifySessionUseCase",
    "LogoutUseCase",
    "CleanupExpiredSessionsUseCase",
    "CreateUserUseCase",
    # DTOs
    "CreateUserCommand",
    "LoginResult",
    "UserInfo",
]
