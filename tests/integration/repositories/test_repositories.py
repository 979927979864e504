from datetime import datetime, timedelta

import pytest
from sqlalchemy import delete
from sqlmodel import select

from textsafe.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from textsafe.domain.entities import EncryptedText, Session, User

NOW = datetime(2025, 1, 15, 12, 0, 0)


def make_session(user, token_char, expires_at):
    return Session(
        user_id=user.id,
        session_token=token_char * 64,
        expires_at=expires_at,
        created_at=expires_at - timedelta(hours=24),
    )


def make_text(user, label, updated_at):
    return EncryptedText(
        user_id=user.id,
        encrypted_content=f"cipher-{label}",
        iv="00" * 12,
        created_at=updated_at,
        updated_at=updated_at,
    )


@pytest.mark.asyncio
async def test_find_active_user_respects_expiry(db_session, alice):
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await uow.sessions.create(make_session(alice, "a", NOW + timedelta(seconds=1)))
        await uow.sessions.create(make_session(alice, "b", NOW))
        await uow.commit()

        live = await uow.sessions.find_active_user_by_token("a" * 64, NOW)
        at_boundary = await uow.sessions.find_active_user_by_token("b" * 64, NOW)
        unknown = await uow.sessions.find_active_user_by_token("c" * 64, NOW)

        assert live.id == alice.id
        assert at_boundary is None
        assert unknown is None


@pytest.mark.asyncio
async def test_delete_expired_removes_only_expired(db_session, alice):
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await uow.sessions.create(make_session(alice, "a", NOW - timedelta(hours=1)))
        await uow.sessions.create(make_session(alice, "b", NOW))
        await uow.sessions.create(make_session(alice, "c", NOW + timedelta(hours=1)))
        await uow.commit()

        removed = await uow.sessions.delete_expired(NOW)
        await uow.commit()
        again = await uow.sessions.delete_expired(NOW)
        await uow.commit()

    remaining = (await db_session.exec(select(Session.session_token))).all()
    assert removed == 2
    assert again == 0
    assert remaining == ["c" * 64]


@pytest.mark.asyncio
async def test_delete_by_token(db_session, alice):
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await uow.sessions.create(make_session(alice, "a", NOW + timedelta(hours=1)))
        await uow.commit()

        first = await uow.sessions.delete_by_token("a" * 64)
        second = await uow.sessions.delete_by_token("a" * 64)
        await uow.commit()

    assert first == 1
    assert second == 0


@pytest.mark.asyncio
async def test_update_login_state(db_session, alice):
    locked_until = NOW + timedelta(minutes=15)
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await uow.users.update_login_state(
            alice.id, failed_login_attempts=5, locked_until=locked_until
        )
        await uow.commit()

        user = await uow.users.get_by_username("alice")
        same_user = await uow.users.get_by_id(alice.id)
        missing = await uow.users.get_by_id(alice.id + 100)

        assert same_user.id == user.id
        assert missing is None
        assert user.failed_login_attempts == 5
        assert user.locked_until == locked_until
        assert user.is_locked(NOW) is True
        assert user.is_locked(locked_until) is False
        assert user.last_login is None


@pytest.mark.asyncio
async def test_exists_any(db_session):
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        assert await uow.users.exists_any() is False
        await uow.users.create(User(username="carol", password_hash="x"))
        await uow.commit()
        assert await uow.users.exists_any() is True


@pytest.mark.asyncio
async def test_deleting_user_cascades(db_session, alice):
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await uow.sessions.create(make_session(alice, "a", NOW + timedelta(hours=1)))
        await uow.texts.create(make_text(alice, "one", NOW))
        await uow.commit()

    await db_session.execute(delete(User).where(User.id == alice.id))
    await db_session.commit()

    assert (await db_session.exec(select(Session))).all() == []
    assert (await db_session.exec(select(EncryptedText))).all() == []


@pytest.mark.asyncio
async def test_texts_listing_and_owner_scope(db_session, alice, bob):
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        older = await uow.texts.create(make_text(alice, "older", NOW - timedelta(hours=1)))
        newer = await uow.texts.create(make_text(alice, "newer", NOW))
        bobs = await uow.texts.create(make_text(bob, "bob", NOW))
        await uow.commit()

        listed = await uow.texts.list_by_user(alice.id)
        foreign = await uow.texts.get_for_user(bobs.id, alice.id)
        foreign_delete = await uow.texts.delete_for_user(bobs.id, alice.id)
        own_delete = await uow.texts.delete_for_user(older.id, alice.id)
        await uow.commit()

    assert [t.id for t in listed] == [newer.id, older.id]
    assert foreign is None
    assert foreign_delete is False
    assert own_delete is True


@pytest.mark.asyncio
async def test_update_for_user(db_session, alice, bob):
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        text = await uow.texts.create(make_text(alice, "v1", NOW))
        await uow.commit()

        changes = EncryptedText(
            id=text.id,
            user_id=alice.id,
            encrypted_content="cipher-v2",
            iv="11" * 12,
            encrypted_name="cipher-name",
            name_iv="22" * 12,
            updated_at=NOW + timedelta(minutes=5),
        )
        not_owner = await uow.texts.update_for_user(changes, bob.id)
        updated = await uow.texts.update_for_user(changes, alice.id)
        await uow.commit()

    assert not_owner is None
    assert updated.encrypted_content == "cipher-v2"
    assert updated.iv == "11" * 12
    assert updated.updated_at == NOW + timedelta(minutes=5)
    assert updated.created_at == NOW
