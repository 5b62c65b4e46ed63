"""
Notification Service
Delivers plain-text emails for signup alerts and approval decisions.
"""

import asyncio
import logging
import smtplib
from email.mime.text import MIMEText
from typing import Protocol

from hornethive.config import Settings, settings
from hornethive.errors import NotificationError

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    async def notify(self, recipient: str, subject: str, body: str) -> None: ...


class SmtpNotifier:
    """
    Sends mail over SMTP. Without an SMTP host configured, messages are
    written to the log instead (local development).
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        user: str = "",
        password: str = "",
        sender: str = "",
        use_tls: bool = True,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender or user
        self.use_tls = use_tls

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "SmtpNotifier":
        return cls(
            host=config.smtp_host,
            port=config.smtp_port,
            user=config.smtp_user,
            password=config.smtp_password,
            sender=config.mail_from,
            use_tls=config.smtp_use_tls,
        )

    async def notify(self, recipient: str, subject: str, body: str) -> None:
        if not self.host:
            logger.info(f"[MOCK EMAIL] To: {recipient} | Subject: {subject}\n{body}")
            return

        try:
            await asyncio.to_thread(self._send, recipient, subject, body)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP delivery to {recipient} failed: {e}")
            raise NotificationError(f"Could not send email to {recipient}") from e
        logger.info(f"Email '{subject}' sent to {recipient}")

    def _send(self, recipient: str, subject: str, body: str) -> None:
        msg = MIMEText(body)
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = recipient

        with smtplib.SMTP(self.host, self.port) as server:
            if self.use_tls:
                server.starttls()
            if self.user:
                server.login(self.user, self.password)
            server.sendmail(self.sender, [recipient], msg.as_string())
