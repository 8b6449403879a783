"""SMTP mail delivery."""

import asyncio
import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Protocol

from ....config.settings import DocManagerSettings
from ....core.exceptions import MailDeliveryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    text_body: str
    html_body: Optional[str] = None
    from_address: Optional[str] = None


class Mailer(Protocol):
    """Anything able to deliver an ``EmailMessage``; may raise on failure."""

    async def send(self, message: EmailMessage) -> None:
        ...


class SmtpMailer:
    """Sends mail through an SMTP relay.

    smtplib is blocking, so delivery runs in a worker thread.
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        from_address: str = "noreply@docmanager.com",
        from_name: Optional[str] = None,
        timeout_seconds: int = 10,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.from_address = from_address
        self.from_name = from_name
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls, settings: DocManagerSettings) -> "SmtpMailer":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password.get_secret_value() if settings.smtp_password else None,
            use_tls=settings.smtp_use_tls,
            from_address=settings.app_email_from,
            timeout_seconds=settings.smtp_timeout_seconds,
        )

    def build_mime(self, message: EmailMessage) -> MIMEMultipart:
        sender = message.from_address or self.from_address
        msg = MIMEMultipart("alternative")
        msg["Subject"] = message.subject
        msg["From"] = f"{self.from_name} <{sender}>" if self.from_name else sender
        msg["To"] = message.to

        msg.attach(MIMEText(message.text_body, "plain", "utf-8"))
        if message.html_body:
            msg.attach(MIMEText(message.html_body, "html", "utf-8"))
        return msg

    async def send(self, message: EmailMessage) -> None:
        """Deliver ``message``.

        Raises:
            MailDeliveryError: the relay refused the message or was unreachable
        """
        msg = self.build_mime(message)
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Email to {message.to} failed: {e}")
            raise MailDeliveryError(
                f"Email sending failed: {e}",
                details={"smtp_host": self.host, "to_email": message.to, "error_type": type(e).__name__},
            ) from e

        logger.info(f"Email sent to {message.to}: {message.subject}")

    def _deliver(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout_seconds) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)
