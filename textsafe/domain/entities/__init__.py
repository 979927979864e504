"""
TextSafe Domain Entities

Each entity in its own file.
"""

from .enums import ErrorCode, RateLimitBucket

from .user import User
from .session import Session
from .encrypted_text import EncryptedText

__all__ = [
    # Enums
    "ErrorCode",
    "RateLimitBucket",
    # Entities
    "User",
    "Session",
    "EncryptedText",
]
