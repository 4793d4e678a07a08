"""
Mail dispatcher: hands one composed message to the SMTP server.

Each send is a single attempt on its own short-lived connection. The blocking
smtplib work runs in a worker thread and is bounded by
Settings.send_timeout_seconds, both as the socket timeout and as an
asyncio.wait_for around the thread.
"""

import asyncio
import logging
import re
import smtplib
import ssl
from email.message import EmailMessage
from typing import Protocol

from app.core.config import Settings
from app.models.contact import DispatchOutcome, OutboundMessage

logger = logging.getLogger(__name__)

_TAG = re.compile(r"<[^>]+>")
_BLANK_LINES = re.compile(r"\n\s*\n+")


class MailDispatcher(Protocol):
    async def send(self, message: OutboundMessage) -> DispatchOutcome:
        ...


def html_to_text(html_body: str) -> str:
    """Rough plain-text alternative for clients that do not render HTML"""
    text = _TAG.sub("", html_body.replace("<br>", "\n"))
    text = _BLANK_LINES.sub("\n\n", text)
    return "\n".join(line.strip() for line in text.strip().splitlines())


def build_email(message: OutboundMessage) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = message.from_address
    msg["To"] = message.to
    msg["Subject"] = message.subject
    msg.set_content(html_to_text(message.html_body))
    msg.add_alternative(message.html_body, subtype="html")
    return msg


class SMTPMailDispatcher:
    def __init__(self, settings: Settings):
        self.host = settings.smtp_host
        self.port = settings.smtp_port
        self.username = settings.email_user
        self.password = settings.email_app_password
        self.timeout = settings.send_timeout_seconds

    def _connect(self) -> smtplib.SMTP:
        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        try:
            server.starttls(context=ssl.create_default_context())
            server.login(self.username, self.password)
        except Exception:
            server.close()
            raise
        return server

    def _send_blocking(self, email: EmailMessage) -> None:
        with self._connect() as server:
            server.send_message(email)

    def _verify_blocking(self) -> None:
        with self._connect() as server:
            server.noop()

    async def send(self, message: OutboundMessage) -> DispatchOutcome:
        """
        Attempt one delivery of `message`.

        Transport failures are returned as an unsuccessful outcome rather
        than raised, so that a caller awaiting several sends always gets
        every result.
        """
        try:
            email = build_email(message)
        except ValueError as e:
            logger.error(f"❌ Could not build {message.kind} email: {str(e)}")
            return DispatchOutcome(message=message, success=False, error=str(e))

        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._send_blocking, email),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            error = f"Timed out after {self.timeout:g}s"
            logger.error(f"❌ Sending {message.kind} email timed out: {error}")
            return DispatchOutcome(message=message, success=False, error=error)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"❌ Error sending {message.kind} email: {str(e)}")
            return DispatchOutcome(message=message, success=False, error=str(e))

        logger.info(f"✅ Sent {message.kind} email")
        return DispatchOutcome(message=message, success=True)

    async def verify(self) -> bool:
        """Check once that the SMTP server accepts our credentials; never raises"""
        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._verify_blocking),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Error with email transporter: timed out after {self.timeout:g}s")
            return False
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Error with email transporter: {str(e)}")
            return False

        logger.info("Server is ready to send emails")
        return True
