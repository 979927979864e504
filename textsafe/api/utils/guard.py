"""
Request Guard

FastAPI dependencies applied to every protected operation, in order:

1. derive the client identity from proxy headers
2. charge the request to the client's rate-limit bucket (429 on reject)
3. require the session cookie (401 when absent)
4. verify the session (401 when unknown or expired)

Security headers are added by SecurityHeadersMiddleware on every path.
"""

import logging
from typing import Optional

from fastapi import Depends, Request, status

from textsafe.api.error import ClientError
from textsafe.app.services.rate_limiter import RateLimiter
from textsafe.app.services.unit_of_work import UnitOfWork
from textsafe.app.use_cases.auth import UserInfo, VerifySessionUseCase
from textsafe.depends import get_config, get_rate_limiter, get_unit_of_work
from textsafe.domain.entities import ErrorCode, RateLimitBucket
from textsafe.libs.result import Error

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


def get_client_ip(request: Request) -> str:
    """
    First X-Forwarded-For entry, else X-Real-IP, else "unknown".

    The headers are trusted as set by the reverse proxy in front of the app.
    Clients without either header share the "unknown" bucket.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    return UNKNOWN_CLIENT


class RateLimitGuard:
    """
    Dependency charging one request to a bucket.

    Each bucket has its own budget, so exhausting the auth budget does not
    affect the general API budget for the same client.
    """

    MESSAGES = {
        RateLimitBucket.api: "Too many requests. Please try again later.",
        RateLimitBucket.auth: "Too many login attempts. Please try again later.",
    }

    def __init__(self, bucket: RateLimitBucket):
        self.bucket = bucket

    def _policy(self, config) -> tuple:
        if self.bucket == RateLimitBucket.auth:
            return (
                config.AUTH_RATE_LIMIT_MAX_REQUESTS,
                config.AUTH_RATE_LIMIT_WINDOW_SECONDS,
            )
        return config.RATE_LIMIT_MAX_REQUESTS, config.RATE_LIMIT_WINDOW_SECONDS

    async def __call__(
        self,
        request: Request,
        rate_limiter: RateLimiter = Depends(get_rate_limiter),
        config=Depends(get_config),
    ) -> str:
        client_ip = get_client_ip(request)
        max_requests, window_seconds = self._policy(config)

        result = rate_limiter.hit(
            f"{self.bucket.value}:{client_ip}", max_requests, window_seconds
        )
        if not result.allowed:
            logger.warning(f"Rate limit exceeded: bucket={self.bucket.value} ip={client_ip}")
            raise ClientError(
                Error(ErrorCode.RATE_LIMIT_EXCEEDED, self.MESSAGES[self.bucket]),
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            )
        return client_ip


api_rate_limit = RateLimitGuard(RateLimitBucket.api)
auth_rate_limit = RateLimitGuard(RateLimitBucket.auth)


def get_session_token(request: Request, config=Depends(get_config)) -> Optional[str]:
    """Session token from the session cookie, if any"""
    return request.cookies.get(config.SESSION_COOKIE_NAME) or None


async def get_current_user(
    _client_ip: str = Depends(api_rate_limit),
    session_token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> UserInfo:
    """
    Dependency for protected routes: rate limit, then session check.

    Raises:
        ClientError: 429 when rate limited, 401 if the session cookie is
            missing or its session is unknown or expired
    """
    if not session_token:
        raise ClientError(
            Error(ErrorCode.UNAUTHORIZED, "Unauthorized"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    user = await VerifySessionUseCase(uow).execute(session_token)
    if user is None:
        raise ClientError(
            Error(ErrorCode.UNAUTHORIZED, "Unauthorized"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return user
