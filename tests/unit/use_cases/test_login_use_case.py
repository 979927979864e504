import re
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from textsafe.app.use_cases.auth.login_use_case import LoginUseCase
from textsafe.domain.entities import Session, User

PASSWORD = "Correct-Horse-42!"


@pytest.fixture
def hasher(password_hasher):
    """Real bcrypt hasher wrapped so calls can be asserted"""
    return MagicMock(wraps=password_hasher)


@pytest.fixture
def alice(password_hasher):
    return User(
        id=1,
        username="alice",
        password_hash=password_hasher.hash(PASSWORD),
        failed_login_attempts=0,
    )


def make_use_case(mock_uow, hasher, clock):
    return LoginUseCase(mock_uow, hasher, clock=clock)


@pytest.mark.asyncio
async def test_successful_login(mock_uow, hasher, clock, now, alice):
    """Correct credentials issue a 24h session and reset the counters"""
    # Arrange
    mock_uow.users.get_by_username.return_value = alice
    use_case = make_use_case(mock_uow, hasher, clock)

    # Act
    result = await use_case.execute(
        "alice", PASSWORD, ip_address="203.0.113.7", user_agent="pytest"
    )

    # Assert
    assert result.is_ok()
    assert result.value.user.id == 1
    assert result.value.user.username == "alice"
    assert re.fullmatch(r"[0-9a-f]{64}", result.value.session_token)

    mock_uow.users.update_login_state.assert_called_once_with(
        1, failed_login_attempts=0, locked_until=None, last_login=now
    )

    mock_uow.sessions.create.assert_called_once()
    session = mock_uow.sessions.create.call_args[0][0]
    assert isinstance(session, Session)
    assert session.user_id == 1
    assert session.session_token == result.value.session_token
    assert session.expires_at == now + timedelta(hours=24)
    assert session.ip_address == "203.0.113.7"
    assert session.user_agent == "pytest"

    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_successive_logins_issue_distinct_tokens(mock_uow, hasher, clock, now, alice):
    mock_uow.users.get_by_username.return_value = alice
    use_case = make_use_case(mock_uow, hasher, clock)

    first = await use_case.execute("alice", PASSWORD)
    second = await use_case.execute("alice", PASSWORD)

    assert first.value.session_token != second.value.session_token
    assert mock_uow.sessions.create.call_count == 2


@pytest.mark.asyncio
async def test_login_unknown_user(mock_uow, hasher, clock):
    """Unknown usernames still pay for a hash comparison"""
    mock_uow.users.get_by_username.return_value = None
    use_case = make_use_case(mock_uow, hasher, clock)

    result = await use_case.execute("mallory", "whatever")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    assert result.error.message == "Invalid credentials"
    hasher.verify_dummy.assert_called_once_with("whatever")

    mock_uow.users.update_login_state.assert_not_called()
    mock_uow.sessions.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_user_and_wrong_password_are_indistinguishable(
    mock_uow, hasher, clock, now, alice
):
    use_case = make_use_case(mock_uow, hasher, clock)

    mock_uow.users.get_by_username.return_value = None
    unknown = await use_case.execute("mallory", "wrong")

    mock_uow.users.get_by_username.return_value = alice
    wrong = await use_case.execute("alice", "wrong")

    assert unknown.error == wrong.error


@pytest.mark.asyncio
async def test_wrong_password_increments_counter(mock_uow, hasher, clock, now, alice):
    alice.failed_login_attempts = 2
    mock_uow.users.get_by_username.return_value = alice
    use_case = make_use_case(mock_uow, hasher, clock)

    result = await use_case.execute("alice", "wrong")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.users.update_login_state.assert_called_once_with(
        1, failed_login_attempts=3, locked_until=None
    )
    mock_uow.commit.assert_called_once()
    mock_uow.sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_fifth_failure_locks_account(mock_uow, hasher, clock, now, alice):
    alice.failed_login_attempts = 4
    mock_uow.users.get_by_username.return_value = alice
    use_case = make_use_case(mock_uow, hasher, clock)

    result = await use_case.execute("alice", "wrong")

    # The failure that triggers the lock still reports invalid credentials
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.users.update_login_state.assert_called_once_with(
        1, failed_login_attempts=5, locked_until=now + timedelta(minutes=15)
    )


@pytest.mark.asyncio
async def test_locked_account_rejects_correct_password(mock_uow, hasher, clock, now, alice):
    alice.failed_login_attempts = 5
    alice.locked_until = now + timedelta(minutes=10, seconds=30)
    mock_uow.users.get_by_username.return_value = alice
    use_case = make_use_case(mock_uow, hasher, clock)

    result = await use_case.execute("alice", PASSWORD)

    assert result.is_err()
    assert result.error.code == "ACCOUNT_LOCKED"
    # Remaining time is rounded up to whole minutes
    assert result.error.details == {"remaining_minutes": 11}
    assert result.error.message == "Account is locked. Please try again in 11 minutes."

    hasher.verify.assert_not_called()
    mock_uow.users.update_login_state.assert_not_called()
    mock_uow.sessions.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_lock_expiry_allows_login_and_resets(mock_uow, hasher, clock, now, alice):
    alice.failed_login_attempts = 5
    alice.locked_until = now - timedelta(seconds=1)
    mock_uow.users.get_by_username.return_value = alice
    use_case = make_use_case(mock_uow, hasher, clock)

    result = await use_case.execute("alice", PASSWORD)

    assert result.is_ok()
    mock_uow.users.update_login_state.assert_called_once_with(
        1, failed_login_attempts=0, locked_until=None, last_login=now
    )


@pytest.mark.asyncio
async def test_failure_after_lock_expiry_relocks_immediately(
    mock_uow, hasher, clock, now, alice
):
    """The counter survives an expired lock; the next failure locks again"""
    alice.failed_login_attempts = 5
    alice.locked_until = now - timedelta(minutes=1)
    mock_uow.users.get_by_username.return_value = alice
    use_case = make_use_case(mock_uow, hasher, clock)

    result = await use_case.execute("alice", "wrong")

    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.users.update_login_state.assert_called_once_with(
        1, failed_login_attempts=6, locked_until=now + timedelta(minutes=15)
    )


@pytest.mark.asyncio
async def test_custom_policy(mock_uow, hasher, clock, now, alice):
    alice.failed_login_attempts = 1
    mock_uow.users.get_by_username.return_value = alice
    use_case = LoginUseCase(
        mock_uow,
        hasher,
        max_failed_attempts=2,
        lockout_duration=timedelta(minutes=1),
        clock=clock,
    )

    await use_case.execute("alice", "wrong")

    mock_uow.users.update_login_state.assert_called_once_with(
        1, failed_login_attempts=2, locked_until=now + timedelta(minutes=1)
    )
