from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from textsafe.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from textsafe.app.services.encryption_service import EncryptionService

TEST_ENCRYPTION_KEY = "unit-test-encryption-key-0123456789abcdef"


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_username = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock()
    uow.users.update_login_state = AsyncMock()
    uow.users.exists_any = AsyncMock(return_value=False)

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock()
    uow.sessions.find_active_user_by_token = AsyncMock(return_value=None)
    uow.sessions.delete_by_token = AsyncMock(return_value=0)
    uow.sessions.delete_expired = AsyncMock(return_value=0)

    uow.texts = MagicMock()
    uow.texts.list_by_user = AsyncMock(return_value=[])
    uow.texts.get_for_user = AsyncMock(return_value=None)
    uow.texts.create = AsyncMock()
    uow.texts.update_for_user = AsyncMock(return_value=None)
    uow.texts.delete_for_user = AsyncMock(return_value=False)

    return uow


@pytest.fixture(scope="session")
def password_hasher():
    # Minimum cost keeps the suite fast
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def encryption():
    return EncryptionService(TEST_ENCRYPTION_KEY)


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 12, 0, 0)


@pytest.fixture
def clock(now):
    return lambda: now
