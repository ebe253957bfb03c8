from __future__ import annotations

import smtplib

import pytest

from fwmon.config import EmailConfig
from fwmon.errors import NotificationError
from fwmon.models import ReportPayload
from fwmon.notify import Credentials, Mailer, build_message, render_html, render_text
from fwmon.notify import mailer as mailer_module

PAYLOAD = ReportPayload(
    count=2,
    entries=(
        ("SN001", "3.1.9", "3.2.0", "2024-05-03"),
        ("SN<7>", None, "1.0", None),
    ),
)


class DummySMTP:
    instances: list[DummySMTP] = []

    def __init__(self, host: str, port: int, timeout: float) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self.calls: list[str] = []
        self.sent = []
        DummySMTP.instances.append(self)

    def __enter__(self) -> DummySMTP:
        return self

    def __exit__(self, *exc) -> None:
        self.calls.append("quit")

    def ehlo(self) -> None:
        self.calls.append("ehlo")

    def starttls(self, context=None) -> None:
        self.calls.append("starttls")

    def login(self, user: str, password: str) -> None:
        self.calls.append(f"login:{user}")

    def send_message(self, msg) -> None:
        self.sent.append(msg)


@pytest.fixture(autouse=True)
def _reset_dummy():
    DummySMTP.instances = []


def test_render_html_escapes_and_orders_rows():
    html = render_html(PAYLOAD)

    assert html.index("SN001") < html.index("SN&lt;7&gt;")
    assert "<b>3.2.0</b>" in html
    assert "Expected version" in html


def test_render_text_lists_every_entry():
    text = render_text(PAYLOAD)

    assert text.startswith("2 device(s)")
    assert "SN001 | 3.1.9 | 3.2.0 | 2024-05-03" in text
    assert "SN<7> | - | 1.0 | -" in text


def test_build_message_headers():
    credentials = Credentials(user="me@example.com", password="x", recipients=["a@b"])

    msg = build_message(PAYLOAD, EmailConfig(), credentials)

    assert msg["Subject"] == "[ALERT] 2 device(s) require a firmware update"
    assert msg["To"] == "a@b"
    assert "me@example.com" in msg["From"]
    assert msg.is_multipart()


def test_credentials_from_env_falls_back_to_user(monkeypatch):
    monkeypatch.setenv(mailer_module.USER_ENV_VAR, "ops@example.com")
    monkeypatch.setenv(mailer_module.PASSWORD_ENV_VAR, "secret")

    credentials = Credentials.from_env(EmailConfig())
    assert credentials.recipients == ["ops@example.com"]

    monkeypatch.setenv(mailer_module.DEST_ENV_VAR, "a@x, b@x")
    assert Credentials.from_env(EmailConfig()).recipients == ["a@x", "b@x"]

    config = EmailConfig(recipients=["team@x"])
    assert Credentials.from_env(config).recipients == ["team@x"]


def test_credentials_missing_raise():
    with pytest.raises(NotificationError):
        Credentials.from_env(EmailConfig())


def test_mailer_sends_over_smtp(monkeypatch):
    monkeypatch.setattr(mailer_module.smtplib, "SMTP", DummySMTP)
    credentials = Credentials(user="me@x", password="pw", recipients=["ops@x"])
    config = EmailConfig(smtp_host="mail.local", smtp_port=2525)

    Mailer(config, credentials).send(PAYLOAD)

    (smtp,) = DummySMTP.instances
    assert (smtp.host, smtp.port) == ("mail.local", 2525)
    assert smtp.calls == ["ehlo", "starttls", "ehlo", "login:me@x", "quit"]
    assert len(smtp.sent) == 1


def test_mailer_wraps_smtp_errors(monkeypatch):
    class BrokenSMTP(DummySMTP):
        def login(self, user: str, password: str) -> None:
            raise smtplib.SMTPAuthenticationError(535, b"bad credentials")

    monkeypatch.setattr(mailer_module.smtplib, "SMTP", BrokenSMTP)
    credentials = Credentials(user="me@x", password="pw", recipients=["ops@x"])

    with pytest.raises(NotificationError, match="Failed to send report"):
        Mailer(EmailConfig(use_tls=False), credentials).send(PAYLOAD)
