"""
Authentication Use Case DTOs (Data Transfer Objects)

Command and Response classes for the auth domain.
"""

from pydantic import BaseModel


class UserInfo(BaseModel):
    """Public identity of a user (never includes the password hash)"""

    id: int
    username: str


class LoginResult(BaseModel):
    """Output of a successful login"""

    user: UserInfo
    session_token: str


class CreateUserCommand(BaseModel):
    """Create user command - externally supplied credentials"""

    username: str
    password: str
