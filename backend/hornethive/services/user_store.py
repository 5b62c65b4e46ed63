"""
User Store
Query capabilities the identity workflows need from persistence, and the
SQLAlchemy implementation backing them.

Every method opens its own short-lived session, so a store instance can be
shared between a request and work that outlives it (credential migration).
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional, Protocol

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hornethive.errors import DuplicateEmailError, StoreError
from hornethive.models.user import User

logger = logging.getLogger(__name__)

# Columns that may be read one at a time by email
QUERYABLE_COLUMNS = {"role", "active", "approved", "username", "id"}


class UserStore(Protocol):
    """Contract for user persistence. Failures surface as StoreError."""
    async def get_by_email(self, email: str) -> Optional[User]: ...
    async def get_by_id(self, user_id: int) -> Optional[User]: ...
    async def find_by_username(self, username: str) -> List[User]: ...
    async def find_usernames_with_prefix(self, prefix: str) -> List[str]: ...
    async def get_values_by_email(self, email: str, column: str) -> List[Any]: ...
    async def insert(self, values: dict) -> User: ...
    async def update_by_id(self, user_id: int, values: dict) -> bool: ...
    async def update_by_email(self, email: str, values: dict) -> List[User]: ...


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlAlchemyUserStore:
    """UserStore over an async SQLAlchemy session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Provide a session; roll back and convert SQLAlchemy failures."""
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                detail = str(getattr(e, "orig", None) or e)
                logger.error(f"User store {operation} failed: {detail}")
                raise StoreError(detail) from e

    async def get_by_email(self, email: str) -> Optional[User]:
        async with self._session("get_by_email") as session:
            result = await session.execute(select(User).where(User.email == email))
            return result.scalars().first()

    async def get_by_id(self, user_id: int) -> Optional[User]:
        async with self._session("get_by_id") as session:
            return await session.get(User, user_id)

    async def find_by_username(self, username: str) -> List[User]:
        """Case-insensitive exact match."""
        async with self._session("find_by_username") as session:
            result = await session.execute(
                select(User).where(func.lower(User.username) == func.lower(username))
            )
            return list(result.scalars().all())

    async def find_usernames_with_prefix(self, prefix: str) -> List[str]:
        """Case-insensitive prefix match, wildcards in the prefix taken literally."""
        pattern = f"{_escape_like(prefix)}%"
        async with self._session("find_usernames_with_prefix") as session:
            result = await session.execute(
                select(User.username).where(
                    func.lower(User.username).like(func.lower(pattern), escape="\\")
                )
            )
            return list(result.scalars().all())

    async def get_values_by_email(self, email: str, column: str) -> List[Any]:
        if column not in QUERYABLE_COLUMNS:
            raise ValueError(f"Column '{column}' cannot be queried by email")
        async with self._session("get_values_by_email") as session:
            result = await session.execute(
                select(getattr(User, column)).where(User.email == email)
            )
            return list(result.scalars().all())

    async def insert(self, values: dict) -> User:
        user = User(**values)
        async with self._session("insert") as session:
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                if "email" in str(e.orig).lower():
                    logger.info(f"Insert rejected, email already present: {values.get('email')}")
                    raise DuplicateEmailError() from e
                raise
            await session.refresh(user)
            return user

    async def update_by_id(self, user_id: int, values: dict) -> bool:
        """Apply a partial update. Returns False when no row has that id."""
        async with self._session("update_by_id") as session:
            user = await session.get(User, user_id)
            if user is None:
                return False
            for field, value in values.items():
                setattr(user, field, value)
            await session.commit()
            return True

    async def update_by_email(self, email: str, values: dict) -> List[User]:
        """Apply a partial update to every row with that email; returns the rows."""
        async with self._session("update_by_email") as session:
            result = await session.execute(select(User).where(User.email == email))
            users = list(result.scalars().all())
            for user in users:
                for field, value in values.items():
                    setattr(user, field, value)
            if users:
                await session.commit()
            return users
