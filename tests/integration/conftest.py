import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from textsafe.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from textsafe.adapter.services.in_memory_rate_limiter import InMemoryRateLimiter
from textsafe.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from textsafe.api.app import create_app
from textsafe.depends import enable_sqlite_foreign_keys, get_unit_of_work
from textsafe.domain.entities import User

ALICE_PASSWORD = "Alice-Passw0rd!"
BOB_PASSWORD = "B0b-Passw0rd!!"
PASSWORDS = {"alice": ALICE_PASSWORD, "bob": BOB_PASSWORD}


@pytest.fixture(scope="session")
def password_hasher():
    return BcryptPasswordHasher(rounds=4)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def app_config():
    return ApplicationConfig


@pytest.fixture
def app(app_config, session_factory, password_hasher):
    app = create_app(
        app_config,
        rate_limiter=InMemoryRateLimiter(),
        password_hasher=password_hasher,
    )

    async def override_get_unit_of_work():
        # One session per request, like the production dependency
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _add_user(db_session, password_hasher, username, password) -> User:
    user = User(username=username, password_hash=password_hasher.hash(password))
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def alice(db_session, password_hasher):
    return await _add_user(db_session, password_hasher, "alice", ALICE_PASSWORD)


@pytest_asyncio.fixture
async def bob(db_session, password_hasher):
    return await _add_user(db_session, password_hasher, "bob", BOB_PASSWORD)


@pytest.fixture
def login(client):
    """Log in through the API; the session cookie lands in the client jar"""

    async def _login(username, password=None, ip=None):
        headers = {"X-Forwarded-For": ip} if ip else {}
        return await client.post(
            "/auth/login",
            json={"username": username, "password": password or PASSWORDS[username]},
            headers=headers,
        )

    return _login
