"""
Account Query Service
Read-only role and status lookups by email.
"""

from typing import Any

from hornethive.errors import NotFoundError, returns_result
from hornethive.services.user_store import UserStore


class AccountQuery:

    def __init__(self, store: UserStore):
        self.store = store

    @returns_result
    async def get_role(self, email: str) -> str:
        return await self._single_value(email, "role", "Role not found")

    @returns_result
    async def is_active(self, email: str) -> bool:
        return await self._single_value(email, "active", "User not found")

    async def _single_value(self, email: str, column: str, missing: str) -> Any:
        # Exactly one row must match, as with a single-row select
        values = await self.store.get_values_by_email(email, column)
        if len(values) != 1:
            raise NotFoundError(missing)
        return values[0]
