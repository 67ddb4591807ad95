from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Callable

from ..config import SETTINGS, RelaySettings
from ..errors import DeliveryError


SmtpFactory = Callable[..., smtplib.SMTP]

logger = logging.getLogger(__name__)


class SmtpMailer:
    """Delivers messages through an authenticated SMTP account."""

    def __init__(
        self,
        settings: RelaySettings | None = None,
        smtp_factory: SmtpFactory | None = None,
    ) -> None:
        self._settings = settings or SETTINGS
        self._smtp_factory = smtp_factory or smtplib.SMTP_SSL

    def send(self, message: EmailMessage) -> str:
        if not message["Message-ID"]:
            domain = self._settings.gmail_user.rpartition("@")[2] or None
            message["Message-ID"] = make_msgid(domain=domain)
        message_id = str(message["Message-ID"])

        try:
            with self._smtp_factory(
                self._settings.smtp_host,
                self._settings.smtp_port,
                timeout=self._settings.smtp_timeout,
            ) as smtp:
                smtp.login(self._settings.gmail_user, self._settings.gmail_app_password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(str(exc) or exc.__class__.__name__) from exc

        logger.info("Delivered message %s to %s", message_id, message["To"])
        return message_id


MAILER = SmtpMailer()
