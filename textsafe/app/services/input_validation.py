"""
Input validation and sanitization for usernames, passwords and text content.
"""

import re
from typing import List

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9+/=]{3,255}$")
SPECIAL_CHARACTERS = re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]")
# Control characters except \t, \n and \r
CONTROL_CHARACTERS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")

MIN_PASSWORD_LENGTH = 12
MAX_PASSWORD_LENGTH = 255
# Generated base64 credentials of this length skip character class checks
GENERATED_PASSWORD_LENGTH = 128

MAX_CONTENT_LENGTH = 1_000_000
MAX_NAME_LENGTH = 255


def validate_username(username: str) -> bool:
    """3-255 characters from the base64 alphabet."""
    if not isinstance(username, str):
        return False
    return USERNAME_PATTERN.fullmatch(username) is not None


def validate_password(password: str) -> List[str]:
    """Return the list of policy violations (empty when the password is acceptable)."""
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        return [f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"]

    errors = []
    if len(password) > MAX_PASSWORD_LENGTH:
        errors.append(f"Password must be less than {MAX_PASSWORD_LENGTH} characters")

    if len(password) < GENERATED_PASSWORD_LENGTH:
        if not re.search(r"[a-z]", password):
            errors.append("Password must contain at least one lowercase letter")
        if not re.search(r"[A-Z]", password):
            errors.append("Password must contain at least one uppercase letter")
        if not re.search(r"[0-9]", password):
            errors.append("Password must contain at least one number")
        if not SPECIAL_CHARACTERS.search(password):
            errors.append("Password must contain at least one special character")

    return errors


def sanitize_input(value: str, max_length: int = 10_000) -> str:
    """
    Strip NUL and control characters, keeping tabs and line breaks.

    Leading and trailing whitespace is preserved (code indentation matters).

    Raises:
        ValueError: value is empty, not a string, or longer than max_length
    """
    if not value or not isinstance(value, str):
        raise ValueError("Invalid input")

    if len(value) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    sanitized = CONTROL_CHARACTERS.sub("", value)
    if not sanitized:
        raise ValueError("Invalid input")
    return sanitized
