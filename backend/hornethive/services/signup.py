"""
Signup Workflow
Registers a new account in the pending-approval state.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable

from hornethive.config import settings
from hornethive.errors import DuplicateEmailError, returns_result
from hornethive.schemas.user import UserCreate
from hornethive.services.password_hasher import PasswordHasher
from hornethive.services.user_store import UserStore
from hornethive.utils.dates import add_months, utc_now

logger = logging.getLogger(__name__)

SIGNUP_MESSAGE = "Signup successful, awaiting approval"


class SignupWorkflow:
    """
    Rejects duplicate emails, hashes the password, stamps the credential
    lifetime and inserts the row with approved=False.

    The email check and the insert are separate store calls; the unique
    index on users.email turns a lost race into DuplicateEmailError as well.
    """

    def __init__(
        self,
        store: UserStore,
        hasher: PasswordHasher,
        password_max_age_months: int = settings.password_max_age_months,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.hasher = hasher
        self.password_max_age_months = password_max_age_months
        self.clock = clock

    @returns_result
    async def signup(self, candidate: UserCreate) -> str:
        existing = await self.store.get_by_email(candidate.email)
        if existing is not None:
            logger.info(f"Signup rejected, email already registered: {candidate.email}")
            raise DuplicateEmailError()

        hashed = await asyncio.to_thread(self.hasher.hash, candidate.password)
        now = self.clock()

        values = candidate.model_dump(exclude={"password"})
        values.update(
            password=hashed,
            approved=False,
            password_fresh=now,
            password_expire=add_months(now, self.password_max_age_months),
        )
        user = await self.store.insert(values)

        logger.info(f"Signup recorded for {user.email} (id={user.id}), awaiting approval")
        return SIGNUP_MESSAGE
