from datetime import datetime, timezone

import pytest

from miremover_api.core.errors import Conflict, NotFound
from miremover_api.schemas.user import RegisterSchema
from miremover_api.services import identity
from miremover_api.services.identity import RegistrationResult

from tests.conftest import make_user


def _payload(user_id="u1", username="alice", email="alice@example.com", full_name="Alice", **kw):
    return RegisterSchema(user_id=user_id, username=username, email=email, full_name=full_name, **kw)


async def test_register_creates_user(db):
    result = await identity.register_or_update(db, _payload())

    assert result == RegistrationResult.CREATED
    user = await identity.find(db, "u1")
    assert user.username == "alice"
    assert user.is_active is True
    assert user.created_at is not None
    assert user.password_hash is None


async def test_register_keeps_client_created_at(db):
    created = datetime(2024, 1, 5, 10, 0, tzinfo=timezone.utc)
    await identity.register_or_update(db, _payload(created_at=created))

    user = await identity.find(db, "u1")
    assert user.created_at.replace(tzinfo=None) == created.replace(tzinfo=None)


async def test_register_same_user_id_overwrites(db):
    await identity.register_or_update(db, _payload())

    result = await identity.register_or_update(
        db, _payload(username="alice2", email="alice2@example.com", full_name="Alice B")
    )

    assert result == RegistrationResult.UPDATED
    users = await identity.list_all(db)
    assert len(users) == 1
    assert (users[0].username, users[0].email, users[0].full_name) == ("alice2", "alice2@example.com", "Alice B")


async def test_register_username_collision_conflicts(db):
    await identity.register_or_update(db, _payload(user_id="A", username="x", email="a@example.com"))

    with pytest.raises(Conflict):
        await identity.register_or_update(db, _payload(user_id="B", username="x", email="b@example.com"))

    users = await identity.list_all(db)
    assert [u.username for u in users] == ["x"]
    assert users[0].user_id == "A"


async def test_register_email_collision_conflicts(db):
    await identity.register_or_update(db, _payload(user_id="A", username="a", email="same@example.com"))

    with pytest.raises(Conflict):
        await identity.register_or_update(db, _payload(user_id="B", username="b", email="same@example.com"))

    assert await identity.find(db, "B") is None


async def test_update_into_other_users_username_conflicts(db):
    await make_user(db, "A", username="a")
    await make_user(db, "B", username="b")

    with pytest.raises(Conflict):
        await identity.register_or_update(db, _payload(user_id="A", username="b", email="A@example.com"))

    user = await identity.find(db, "A")
    assert user.username == "a"


async def test_record_login_unknown_user(db):
    with pytest.raises(NotFound):
        await identity.record_login(db, "ghost")


async def test_record_login_sets_timestamp(db):
    await make_user(db, "u1")
    ts = datetime(2024, 3, 1, 8, 30, tzinfo=timezone.utc)

    user = await identity.record_login(db, "u1", ts)

    assert user.last_login == ts


async def test_record_login_defaults_to_now(db):
    await make_user(db, "u1")
    before = datetime.now(timezone.utc)

    user = await identity.record_login(db, "u1")

    assert user.last_login >= before


async def test_list_all_in_registration_order(db):
    for uid in ("c", "a", "b"):
        await make_user(db, uid)

    users = await identity.list_all(db)

    assert [u.user_id for u in users] == ["c", "a", "b"]
