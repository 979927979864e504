from typing import NoReturn

from fastapi import status

from textsafe.domain.entities import ErrorCode
from textsafe.libs.result import Error

ERROR_STATUS = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TEXT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USERNAME_TAKEN: status.HTTP_409_CONFLICT,
    ErrorCode.ACCOUNT_LOCKED: status.HTTP_423_LOCKED,
    ErrorCode.RATE_LIMIT_EXCEEDED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorCode.STORE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.DECRYPTION_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error) -> NoReturn:
    """Raise the ClientError/ServerError matching a use case error code"""
    status_code = ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
