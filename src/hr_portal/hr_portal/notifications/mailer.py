"""Outgoing email.

Services depend on the ``Mailer`` protocol; ``SmtpMailer`` is the production
implementation.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Protocol

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    def send(self, *, to: str, subject: str, html: str) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class SmtpConfig:
    host: str
    port: int
    username: str
    password: str
    sender: str
    use_tls: bool = True


class SmtpMailer:
    def __init__(self, config: SmtpConfig):
        self._config = config

    def is_configured(self) -> bool:
        return all([self._config.host, self._config.username, self._config.password])

    def send(self, *, to: str, subject: str, html: str) -> None:
        if not self.is_configured():
            logger.warning("SMTP not configured, email to %s not sent: %s", to, subject)
            return

        msg = MIMEMultipart()
        msg["From"] = self._config.sender or self._config.username
        msg["To"] = to
        msg["Subject"] = subject
        msg.attach(MIMEText(html, "html"))

        with smtplib.SMTP(self._config.host, self._config.port) as server:
            if self._config.use_tls:
                server.starttls(context=ssl.create_default_context())
            server.login(self._config.username, self._config.password)
            server.send_message(msg)

        logger.info("Email sent to %s: %s", to, subject)


def password_reset_email(*, first_name: str, link: str, minutes: int) -> str:
    return f"""
    <h2>Hello {first_name},</h2>
    <p>We received a request to reset your password.</p>
    <p>If you did not request this, please ignore this email.</p>
    <p><a href="{link}">Reset Password</a></p>
    <p>This link will expire in {minutes} minutes.</p>
    <p>Regards,<br/>HR Portal Team</p>
    """
