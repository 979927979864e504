from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from textsafe.api.error import raise_for_error
from textsafe.api.utils.guard import get_current_user
from textsafe.app.services.encryption_service import EncryptionService
from textsafe.app.services.unit_of_work import UnitOfWork
from textsafe.app.use_cases.auth import UserInfo
from textsafe.app.use_cases.texts import (
    CreateTextCommand,
    CreateTextUseCase,
    DeleteTextUseCase,
    GetTextUseCase,
    ListTextsUseCase,
    TextCreated,
    TextDetail,
    TextList,
    TextUpdated,
    UpdateTextCommand,
    UpdateTextUseCase,
)
from textsafe.depends import get_encryption_service, get_unit_of_work

router = APIRouter(prefix="/texts", tags=["Texts"])


class CreateTextRequest(BaseModel):
    content: Optional[str] = None
    name: Optional[str] = None


class UpdateTextRequest(BaseModel):
    name: Optional[str] = None
    content: Optional[str] = None


class CreateTextResponse(BaseModel):
    message: str
    text: TextCreated


class UpdateTextResponse(BaseModel):
    message: str
    text: TextUpdated


class DeleteTextResponse(BaseModel):
    message: str


@router.get("", status_code=status.HTTP_200_OK, response_model=TextList)
async def list_texts(
    current_user: UserInfo = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    encryption: EncryptionService = Depends(get_encryption_service),
):
    """List the authenticated user's texts, decrypted, newest first"""
    result = await ListTextsUseCase(uow, encryption).execute(current_user.id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreateTextResponse)
async def create_text(
    request: CreateTextRequest,
    current_user: UserInfo = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    encryption: EncryptionService = Depends(get_encryption_service),
):
    """
    Create Text

    Raises:
        - 400 Bad Request: Missing or oversized content
        - 401 Unauthorized: No valid session
        - 429 Too Many Requests: Rate limit exceeded
    """
    command = CreateTextCommand(content=request.content or "", name=request.name)
    result = await CreateTextUseCase(uow, encryption).execute(command, current_user.id)
    if result.is_err():
        raise_for_error(result.error)
    return CreateTextResponse(message="Text saved successfully", text=result.value)


@router.get("/{text_id}", status_code=status.HTTP_200_OK, response_model=TextDetail)
async def get_text(
    text_id: int,
    current_user: UserInfo = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    encryption: EncryptionService = Depends(get_encryption_service),
):
    """
    Get Text

    Raises:
        - 404 Not Found: No such text for this user
        - 500 Internal Server Error: Stored text cannot be decrypted
    """
    result = await GetTextUseCase(uow, encryption).execute(text_id, current_user.id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/{text_id}", status_code=status.HTTP_200_OK, response_model=UpdateTextResponse)
async def update_text(
    text_id: int,
    request: UpdateTextRequest,
    current_user: UserInfo = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    encryption: EncryptionService = Depends(get_encryption_service),
):
    """
    Update Text

    Replaces name and content; both are required.

    Raises:
        - 400 Bad Request: Missing name or content
        - 404 Not Found: No such text for this user
    """
    command = UpdateTextCommand(name=request.name or "", content=request.content or "")
    result = await UpdateTextUseCase(uow, encryption).execute(
        text_id, command, current_user.id
    )
    if result.is_err():
        raise_for_error(result.error)
    return UpdateTextResponse(message="Text updated successfully", text=result.value)


@router.delete("/{text_id}", status_code=status.HTTP_200_OK, response_model=DeleteTextResponse)
async def delete_text(
    text_id: int,
    current_user: UserInfo = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Delete Text (404 when the text does not exist or is not the user's)"""
    result = await DeleteTextUseCase(uow).execute(text_id, current_user.id)
    if result.is_err():
        raise_for_error(result.error)
    return DeleteTextResponse(message="Text deleted successfully")
