"""
Approval Service
Administrator decisions on pending accounts, and the alert that asks for one.
"""

import logging
from urllib.parse import quote

from hornethive.config import settings
from hornethive.errors import NotFoundError, NotificationError, returns_result
from hornethive.schemas.user import UserCreate
from hornethive.services.notifier import Notifier
from hornethive.services.user_store import UserStore

logger = logging.getLogger(__name__)

APPROVED_SUBJECT = "Your HornetHive account is approved!"
REJECTED_SUBJECT = "Your HornetHive account was rejected"
SIGNUP_ALERT_SUBJECT = "New User Signup Approval"


class ApprovalWorkflow:

    def __init__(
        self,
        store: UserStore,
        notifier: Notifier,
        admin_email: str = settings.admin_email,
        public_base_url: str = settings.public_base_url,
        login_url: str = settings.login_url,
        api_prefix: str = settings.api_prefix,
    ):
        self.store = store
        self.notifier = notifier
        self.admin_email = admin_email
        self.public_base_url = public_base_url.rstrip("/")
        self.login_url = login_url
        self.api_prefix = api_prefix

    @returns_result
    async def approve(self, email: str) -> str:
        await self._set_approved(email, True)
        await self.notifier.notify(
            email,
            APPROVED_SUBJECT,
            f"You can now log in at {self.login_url}",
        )
        return "User approved and notified!"

    @returns_result
    async def reject(self, email: str) -> str:
        await self._set_approved(email, False)
        await self.notifier.notify(
            email,
            REJECTED_SUBJECT,
            "Sorry, your account was not approved.",
        )
        return "User rejected and notified!"

    async def _set_approved(self, email: str, approved: bool) -> None:
        users = await self.store.update_by_email(email, {"approved": approved})
        if not users:
            raise NotFoundError()
        logger.info(f"Set approved={approved} for {email}")

    def decision_link(self, action: str, email: str) -> str:
        return f"{self.public_base_url}{self.api_prefix}/{action}?email={quote(email, safe='')}"

    async def notify_admin_of_signup(self, candidate: UserCreate) -> None:
        """Email the administrator approve/reject links for a new signup."""
        if not self.admin_email:
            logger.warning(f"No admin email configured; signup of {candidate.email} needs manual approval")
            return

        body = (
            "A new user signed up:\n\n"
            f"Name: {candidate.first_name or ''} {candidate.last_name or ''}\n"
            f"Email: {candidate.email}\n\n"
            f"Approve: {self.decision_link('approve', candidate.email)}\n"
            f"Reject: {self.decision_link('reject', candidate.email)}\n"
        )
        try:
            await self.notifier.notify(self.admin_email, SIGNUP_ALERT_SUBJECT, body)
        except NotificationError as e:
            # Runs after the signup response; the row stays pending either way
            logger.error(f"Signup alert for {candidate.email} not delivered: {e.message}")
