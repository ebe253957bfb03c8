from __future__ import annotations

import logging
import os
import smtplib
import ssl
from dataclasses import dataclass, field
from email.message import EmailMessage

from fwmon.config import EmailConfig
from fwmon.errors import NotificationError
from fwmon.models import ReportPayload

from .render import render_html, render_text, subject_for

logger = logging.getLogger(__name__)

USER_ENV_VAR = "FWMON_EMAIL_USER"
PASSWORD_ENV_VAR = "FWMON_EMAIL_PASS"
DEST_ENV_VAR = "FWMON_EMAIL_DEST"


@dataclass(frozen=True)
class Credentials:
    user: str
    password: str
    recipients: list[str] = field(default_factory=list)

    @classmethod
    def from_env(cls, config: EmailConfig) -> Credentials:
        user = os.environ.get(USER_ENV_VAR, "")
        password = os.environ.get(PASSWORD_ENV_VAR, "")
        if not user or not password:
            raise NotificationError(
                f"E-mail credentials missing: set {USER_ENV_VAR} and {PASSWORD_ENV_VAR}"
            )

        recipients = list(config.recipients)
        if not recipients:
            dest = os.environ.get(DEST_ENV_VAR, "")
            recipients = [r.strip() for r in dest.split(",") if r.strip()] or [user]
        return cls(user=user, password=password, recipients=recipients)


def build_message(
    payload: ReportPayload, config: EmailConfig, credentials: Credentials
) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = f'"fwmon" <{config.sender or credentials.user}>'
    msg["To"] = ", ".join(credentials.recipients)
    msg["Subject"] = subject_for(payload)
    msg.set_content(render_text(payload))
    msg.add_alternative(render_html(payload), subtype="html")
    return msg


class Mailer:
    def __init__(self, config: EmailConfig, credentials: Credentials | None = None):
        self._config = config
        self._credentials = credentials

    @property
    def credentials(self) -> Credentials:
        if self._credentials is None:
            self._credentials = Credentials.from_env(self._config)
        return self._credentials

    def send(self, payload: ReportPayload) -> None:
        credentials = self.credentials
        msg = build_message(payload, self._config, credentials)
        cfg = self._config

        try:
            with smtplib.SMTP(
                cfg.smtp_host, cfg.smtp_port, timeout=cfg.timeout
            ) as smtp:
                smtp.ehlo()
                if cfg.use_tls:
                    smtp.starttls(context=ssl.create_default_context())
                    smtp.ehlo()
                smtp.login(credentials.user, credentials.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(
                f"Failed to send report via {cfg.smtp_host}:{cfg.smtp_port}: {exc}"
            ) from exc

        logger.info(
            "Sent report for %d device(s) to %s",
            payload.count,
            ", ".join(credentials.recipients),
        )
