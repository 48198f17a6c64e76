# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import smtplib
from email.message import EmailMessage

from storefront.application.interfaces import ResetCodeNotifier
from storefront.domain.users.entities import User
from storefront.shared.config import MailConfig
from storefront.shared.errors.base import FrameworkError
from storefront.shared.logging import logger

RESET_SUBJECT = "Your password reset code"


def render_reset_body(user: User, code: str, ttl_minutes: int) -> str:
    return (
        f"Hello {user.name},\n\n"
        f"Use the code {code} to choose a new password. "
        f"It expires in {ttl_minutes} minutes.\n\n"
        "If you did not ask for a reset you can ignore this message.\n"
    )


class SmtpResetCodeNotifier(ResetCodeNotifier):
    def __init__(self, config: MailConfig, *, ttl_minutes: int = 60) -> None:
        self._config = config
        self._ttl_minutes = ttl_minutes

    def send(self, user: User, code: str) -> None:
        msg = EmailMessage()
        msg["From"] = self._config.from_email
        msg["To"] = user.email
        msg["Subject"] = RESET_SUBJECT
        msg.set_content(render_reset_body(user, code, self._ttl_minutes))

        try:
            with smtplib.SMTP(self._config.smtp_host, self._config.smtp_port, timeout=20) as server:
                if self._config.use_tls:
                    server.starttls()
                if self._config.smtp_username:
                    server.login(self._config.smtp_username, self._config.smtp_password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(f"mail: reset code delivery failed for user {user.id}: {exc}")
            raise FrameworkError() from exc
        logger.info(f"mail: reset code sent to user {user.id}")


class LogResetCodeNotifier(ResetCodeNotifier):
    """Used when no SMTP host is configured. Never logs the code itself."""

    def send(self, user: User, code: str) -> None:
        logger.warning(
            f"mail: SMTP not configured, reset code for user {user.id} was not delivered"
        )


__all__ = ["LogResetCodeNotifier", "SmtpResetCodeNotifier", "render_reset_body"]
