from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, Field

from textsafe.api.error import ClientError, raise_for_error
from textsafe.api.utils.guard import api_rate_limit, auth_rate_limit, get_session_token
from textsafe.app.services.input_validation import MAX_NAME_LENGTH, validate_username
from textsafe.app.services.password_hasher import PasswordHasher
from textsafe.app.services.unit_of_work import UnitOfWork
from textsafe.app.use_cases.auth import (
    LoginUseCase,
    LogoutUseCase,
    UserInfo,
    VerifySessionUseCase,
)
from textsafe.depends import get_config, get_password_hasher, get_unit_of_work
from textsafe.domain.entities import ErrorCode
from textsafe.libs.result import Error

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    username: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH, description="Username")
    password: str = Field(..., min_length=1, max_length=1024, description="User password")


class LoginResponse(BaseModel):
    message: str
    user: UserInfo


class LogoutResponse(BaseModel):
    message: str


class MeResponse(BaseModel):
    user: Optional[UserInfo]


def set_session_cookie(response: Response, config, session_token: str) -> None:
    """HTTP-only, strict same-site cookie; Secure in production"""
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=session_token,
        max_age=int(config.SESSION_TTL_HOURS * 60 * 60),
        path="/",
        secure=config.ENVIRONMENT == "production",
        httponly=True,
        samesite="strict",
    )


def clear_session_cookie(response: Response, config) -> None:
    response.delete_cookie(
        key=config.SESSION_COOKIE_NAME,
        path="/",
        secure=config.ENVIRONMENT == "production",
        httponly=True,
        samesite="strict",
    )


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: Request,
    response: Response,
    payload: LoginRequest,
    client_ip: str = Depends(auth_rate_limit),
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    config=Depends(get_config),
):
    """
    User Login

    Authenticates the user and sets the session cookie.

    Raises:
        - 400 Bad Request: Missing or malformed username/password
        - 401 Unauthorized: Invalid credentials (unknown user or wrong password)
        - 423 Locked: Too many failed attempts, carries remaining_minutes
        - 429 Too Many Requests: Login rate limit exceeded
        - 500 Internal Server Error: Server error
    """
    # Validated as sent, never sanitized into a valid name
    username = payload.username
    if not validate_username(username):
        raise ClientError(
            Error(ErrorCode.VALIDATION_ERROR, "Username and password are required"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    use_case = LoginUseCase(
        uow,
        password_hasher,
        max_failed_attempts=config.MAX_FAILED_LOGIN_ATTEMPTS,
        lockout_duration=timedelta(minutes=config.LOCKOUT_MINUTES),
        session_ttl=timedelta(hours=config.SESSION_TTL_HOURS),
    )
    result = await use_case.execute(
        username,
        payload.password,
        ip_address=client_ip,
        user_agent=request.headers.get("user-agent"),
    )

    if result.is_err():
        raise_for_error(result.error)

    login_result = result.value
    set_session_cookie(response, config, login_result.session_token)

    return LoginResponse(message="Login successful", user=login_result.user)


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    response: Response,
    _client_ip: str = Depends(api_rate_limit),
    session_token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    Logout

    Deletes the session behind the cookie and clears the cookie.
    Succeeds whether or not the session still exists.
    """
    await LogoutUseCase(uow).execute(session_token)
    clear_session_cookie(response, config)
    return LogoutResponse(message="Logged out successfully")


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def me(
    _client_ip: str = Depends(api_rate_limit),
    session_token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Session Check

    Returns the user behind the session cookie, or {"user": null} when the
    cookie is missing, unknown or expired.
    """
    user = await VerifySessionUseCase(uow).execute(session_token)
    return MeResponse(user=user)
