"""
Delete Text Use Case
"""

from textsafe.app.services.unit_of_work import UnitOfWork
from textsafe.domain.entities import ErrorCode
from textsafe.libs.result import Error, Result, Return


class DeleteTextUseCase:
    """Use case for deleting one of the user's texts"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, text_id: int, user_id: int) -> Result[None]:
        async with self.uow:
            deleted = await self.uow.texts.delete_for_user(text_id, user_id)
            if not deleted:
                return Return.err(Error(ErrorCode.TEXT_NOT_FOUND, "Text not found"))
            await self.uow.commit()

        return Return.ok()
