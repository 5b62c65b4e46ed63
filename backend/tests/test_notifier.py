"""SMTP notifier: mock delivery, message assembly, failure mapping."""

import logging
import smtplib

import pytest

from hornethive.errors import NotificationError
from hornethive.services.notifier import SmtpNotifier


class FakeSMTP:
    instances = []

    def __init__(self, host, port):
        self.host = host
        self.port = port
        self.calls = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user, password))

    def sendmail(self, sender, recipients, message):
        self.calls.append(("sendmail", sender, recipients, message))


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


async def test_without_host_message_is_logged(caplog, fake_smtp):
    notifier = SmtpNotifier(host="")

    with caplog.at_level(logging.INFO, logger="hornethive.services.notifier"):
        await notifier.notify("jane@hive.test", "Hello", "Body text")

    assert "[MOCK EMAIL] To: jane@hive.test | Subject: Hello" in caplog.text
    assert fake_smtp.instances == []


async def test_sends_over_smtp_with_tls_and_login(fake_smtp):
    notifier = SmtpNotifier(
        host="smtp.hive.test", port=2525, user="bot@hive.test", password="pw",
    )

    await notifier.notify("jane@hive.test", "Approved", "Welcome aboard")

    [server] = fake_smtp.instances
    assert (server.host, server.port) == ("smtp.hive.test", 2525)
    assert server.calls[0] == "starttls"
    assert server.calls[1] == ("login", "bot@hive.test", "pw")
    _, sender, recipients, message = server.calls[2]
    assert sender == "bot@hive.test"
    assert recipients == ["jane@hive.test"]
    assert "Subject: Approved" in message
    assert "Welcome aboard" in message


async def test_smtp_failure_raises_notification_error(monkeypatch):
    def refuse(host, port):
        raise ConnectionRefusedError("no route")

    monkeypatch.setattr(smtplib, "SMTP", refuse)
    notifier = SmtpNotifier(host="smtp.hive.test")

    with pytest.raises(NotificationError) as exc_info:
        await notifier.notify("jane@hive.test", "Hi", "Body")

    assert exc_info.value.http_status == 502
