"""
TextSafe Domain Enums

Enumeration types shared across layers.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error kinds returned by use cases and rendered by the API"""

    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    UNAUTHORIZED = "UNAUTHORIZED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    USERNAME_TAKEN = "USERNAME_TAKEN"
    TEXT_NOT_FOUND = "TEXT_NOT_FOUND"
    DECRYPTION_FAILED = "DECRYPTION_FAILED"
    STORE_FAILURE = "STORE_FAILURE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class RateLimitBucket(str, Enum):
    """Independent rate-limit budgets per endpoint class"""

    api = "api"
    auth = "auth"
