"""Shared fixtures: fake collaborators, fast hashing, in-memory SQLite.

Workflow tests run against InMemoryUserStore; store and HTTP tests run
against a fresh SQLite database per test.
"""

import os

# Settings are read at import time; keep tests off real infrastructure
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SMTP_HOST", "")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from hornethive.database import Base, use_unicode_lower
from hornethive.services.password_hasher import PasswordHasher
from hornethive.services.user_store import SqlAlchemyUserStore
from hornethive.tasks.background import DetachedTasks

from tests.fakes import ADMIN_EMAIL, InMemoryUserStore, RecordingNotifier


@pytest.fixture(scope="session")
def hasher():
    # Minimum bcrypt work factor keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def tasks():
    return DetachedTasks()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    use_unicode_lower(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def sql_store(test_session_factory):
    return SqlAlchemyUserStore(test_session_factory)


@pytest.fixture
async def client(sql_store, notifier, hasher):
    """FastAPI test client with store, mailer and hasher overridden."""
    from hornethive.api import dependencies as deps
    from hornethive.main import app
    from hornethive.services.approval import ApprovalWorkflow

    app.dependency_overrides[deps.get_user_store] = lambda: sql_store
    app.dependency_overrides[deps.get_notifier] = lambda: notifier
    app.dependency_overrides[deps.get_password_hasher] = lambda: hasher
    app.dependency_overrides[deps.get_approval_workflow] = lambda: ApprovalWorkflow(
        sql_store, notifier, admin_email=ADMIN_EMAIL, public_base_url="http://hive.test",
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
