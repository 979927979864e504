from sqlmodel.ext.asyncio.session import AsyncSession

from textsafe.adapter.repositories.errors import translate_store_errors
from textsafe.adapter.repositories.session_repository import SessionRepository
from textsafe.adapter.repositories.text_repository import TextRepository
from textsafe.adapter.repositories.user_repository import UserRepository
from textsafe.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.texts = TextRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @translate_store_errors
    async def commit(self):
        await self.session.commit()

    @translate_store_errors
    async def rollback(self):
        await self.session.rollback()
