"""
Login Workflow
Authenticates by username and returns the account without its credential.
"""

import asyncio
import logging

from hornethive.errors import (
    AccountNotFoundError,
    IncorrectPasswordError,
    PendingApprovalError,
    returns_result,
)
from hornethive.schemas.user import SafeUser
from hornethive.services.password_hasher import LegacyCredential, PasswordHasher
from hornethive.services.user_store import UserStore
from hornethive.tasks.background import DetachedTasks, detached_tasks

logger = logging.getLogger(__name__)


class LoginWorkflow:
    """
    Looks the user up case-insensitively, refuses unapproved accounts before
    checking the password, and verifies the credential.

    A correct password against a legacy plaintext row schedules a detached
    rewrite to bcrypt; the caller never waits on or hears about that write.
    """

    def __init__(
        self,
        store: UserStore,
        hasher: PasswordHasher,
        tasks: DetachedTasks = detached_tasks,
    ):
        self.store = store
        self.hasher = hasher
        self.tasks = tasks

    @returns_result
    async def login(self, username: str, password: str) -> SafeUser:
        matches = await self.store.find_by_username(username)
        if len(matches) != 1:
            if matches:
                logger.error(f"{len(matches)} accounts share username '{username}'")
            raise AccountNotFoundError()
        user = matches[0]

        if not user.approved:
            logger.info(f"Login refused for '{user.username}': awaiting approval")
            raise PendingApprovalError()

        credential = self.hasher.classify(user.password)
        verification = await asyncio.to_thread(self.hasher.verify, password, credential)
        if not verification.valid:
            logger.info(f"Login refused for '{user.username}': incorrect password")
            raise IncorrectPasswordError()

        if isinstance(credential, LegacyCredential):
            self.tasks.spawn(
                self._migrate_credential(user.id, password),
                name=f"migrate-credential-{user.id}",
            )

        return SafeUser.model_validate(user)

    async def _migrate_credential(self, user_id: int, password: str) -> None:
        """Replace a plaintext password with its bcrypt hash."""
        hashed = await asyncio.to_thread(self.hasher.hash, password)
        updated = await self.store.update_by_id(user_id, {"password": hashed})
        if updated:
            logger.info(f"Migrated legacy credential to bcrypt for user id={user_id}")
        else:
            logger.warning(f"Legacy credential migration skipped, user id={user_id} is gone")
