"""SQLAlchemy user store against in-memory SQLite.

Invariants:
    - Duplicate email insert maps to DuplicateEmailError (unique index)
    - Username lookups ignore case, non-ASCII letters included
    - Prefix lookups treat % and _ literally
    - Partial updates touch only the given columns
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hornethive.errors import DuplicateEmailError, StoreError
from hornethive.services.login import LoginWorkflow
from hornethive.services.user_store import SqlAlchemyUserStore


def row(**overrides):
    values = {
        "email": "jane@hive.test",
        "username": "JDoe0324",
        "password": "$2b$04$placeholder",
        "first_name": "Jane",
        "last_name": "Doe",
    }
    values.update(overrides)
    return values


async def test_insert_applies_defaults(sql_store):
    user = await sql_store.insert(row())

    assert user.id is not None
    assert user.approved is False
    assert user.active is True
    assert user.role == "user"
    assert user.created_at is not None


async def test_get_by_email_and_id(sql_store):
    user = await sql_store.insert(row())

    assert (await sql_store.get_by_email("jane@hive.test")).id == user.id
    assert (await sql_store.get_by_id(user.id)).email == "jane@hive.test"
    assert await sql_store.get_by_email("nobody@hive.test") is None
    assert await sql_store.get_by_id(999) is None


async def test_duplicate_email_insert_is_rejected(sql_store):
    await sql_store.insert(row())

    with pytest.raises(DuplicateEmailError):
        await sql_store.insert(row(username="someone-else"))

    assert len(await sql_store.get_values_by_email("jane@hive.test", "id")) == 1


async def test_find_by_username_ignores_case(sql_store):
    await sql_store.insert(row())

    assert [u.email for u in await sql_store.find_by_username("jdoe0324")] == ["jane@hive.test"]
    assert await sql_store.find_by_username("jdoe") == []


async def test_find_usernames_with_prefix(sql_store):
    await sql_store.insert(row(email="a@hive.test", username="abc01"))
    await sql_store.insert(row(email="b@hive.test", username="ABC01-2"))
    await sql_store.insert(row(email="c@hive.test", username="xyz01"))

    names = await sql_store.find_usernames_with_prefix("abc01")

    assert sorted(names) == ["ABC01-2", "abc01"]


async def test_prefix_wildcards_are_literal(sql_store):
    await sql_store.insert(row(email="a@hive.test", username="axb"))
    await sql_store.insert(row(email="b@hive.test", username="a_b"))

    assert await sql_store.find_usernames_with_prefix("a_") == ["a_b"]
    assert await sql_store.find_usernames_with_prefix("a%") == []


async def test_get_values_by_email(sql_store):
    await sql_store.insert(row(role="admin"))

    assert await sql_store.get_values_by_email("jane@hive.test", "role") == ["admin"]
    assert await sql_store.get_values_by_email("jane@hive.test", "active") == [True]
    assert await sql_store.get_values_by_email("ghost@hive.test", "role") == []


async def test_get_values_rejects_unknown_column(sql_store):
    with pytest.raises(ValueError):
        await sql_store.get_values_by_email("jane@hive.test", "password")


async def test_update_by_id_changes_only_given_fields(sql_store):
    user = await sql_store.insert(row(password="plain"))

    assert await sql_store.update_by_id(user.id, {"password": "$2b$04$new"}) is True

    reloaded = await sql_store.get_by_id(user.id)
    assert reloaded.password == "$2b$04$new"
    assert reloaded.username == "JDoe0324"
    assert reloaded.approved is False


async def test_update_by_id_missing_row(sql_store):
    assert await sql_store.update_by_id(42, {"password": "x"}) is False


async def test_update_by_email_returns_updated_rows(sql_store):
    await sql_store.insert(row())

    users = await sql_store.update_by_email("jane@hive.test", {"approved": True})

    assert [u.approved for u in users] == [True]
    assert (await sql_store.get_by_email("jane@hive.test")).approved is True
    assert await sql_store.update_by_email("ghost@hive.test", {"approved": True}) == []


async def test_database_failure_becomes_store_error(test_engine):
    # Tables dropped underneath the store
    from hornethive.database import Base

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    store = SqlAlchemyUserStore(
        async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    )

    with pytest.raises(StoreError) as exc_info:
        await store.get_by_email("jane@hive.test")

    assert "users" in exc_info.value.detail


async def test_username_lookups_fold_non_ascii_case(sql_store):
    await sql_store.insert(row(email="e@hive.test", username="ÉMILE0324"))

    assert [u.email for u in await sql_store.find_by_username("émile0324")] == ["e@hive.test"]
    assert await sql_store.find_usernames_with_prefix("émile0324") == ["ÉMILE0324"]


async def test_login_over_sql_store_with_non_ascii_username(sql_store, hasher, tasks):
    await sql_store.insert(row(
        email="e@hive.test", username="ÉMILE", password=hasher.hash("pw"), approved=True,
    ))

    result = await LoginWorkflow(sql_store, hasher, tasks=tasks).login("émile", "pw")

    assert result.ok
    assert result.value.email == "e@hive.test"
