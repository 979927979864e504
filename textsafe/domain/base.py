import secrets
from datetime import UTC, datetime

SESSION_TOKEN_BYTES = 32


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the form stored in the database)."""
    return datetime.now(UTC).replace(tzinfo=None)


def generate_session_token() -> str:
    """256 bits from the OS CSPRNG, hex encoded (64 chars)."""
    return secrets.token_hex(SESSION_TOKEN_BYTES)
