from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from textsafe.api.error import raise_for_error
from textsafe.api.utils.guard import api_rate_limit
from textsafe.app.services.password_hasher import PasswordHasher
from textsafe.app.services.unit_of_work import UnitOfWork
from textsafe.app.use_cases.system import InitializeUseCase
from textsafe.depends import get_config, get_password_hasher, get_unit_of_work

router = APIRouter(tags=["System"])


class InitResponse(BaseModel):
    message: str
    user_created: bool
    expired_sessions_removed: int


@router.post("/init", status_code=status.HTTP_200_OK, response_model=InitResponse)
async def initialize(
    _client_ip: str = Depends(api_rate_limit),
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    config=Depends(get_config),
):
    """
    Initialize

    Removes expired sessions and creates the configured user if no user
    exists yet. Safe to call repeatedly.

    Raises:
        - 400 Bad Request: Configured DEFAULT_USERNAME is not a valid username
        - 500 Internal Server Error: Server error
    """
    use_case = InitializeUseCase(
        uow,
        password_hasher,
        default_username=config.DEFAULT_USERNAME,
        default_password=config.DEFAULT_PASSWORD,
    )
    result = await use_case.execute()
    if result.is_err():
        raise_for_error(result.error)

    outcome = result.value
    return InitResponse(
        message="Database initialized",
        user_created=outcome.user_created,
        expired_sessions_removed=outcome.expired_sessions_removed,
    )
