from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from textsafe.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from textsafe.app.services.encryption_service import EncryptionService
from textsafe.app.services.password_hasher import PasswordHasher
from textsafe.app.services.rate_limiter import RateLimiter


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on"""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
enable_sqlite_foreign_keys(engine)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def create_db_and_tables(db_engine: AsyncEngine = engine) -> None:
    async with db_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_config(request: Request):
    return request.app.state.config


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_encryption_service(request: Request) -> EncryptionService:
    return request.app.state.encryption_service
