"""Outbound email senders.

Every sender exposes `send(to, subject, text, html) -> bool`: True when the
provider accepted the message, False otherwise. Senders never raise on
delivery problems; the caller decides what a failed send means.

- ConsoleEmailSender: writes the message to the log (local development)
- MailgunEmailSender: Mailgun HTTP API through a shared httpx.AsyncClient
- SmtpEmailSender: SMTP (SSL or STARTTLS) in a worker thread
"""

import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional, Protocol

import httpx
import structlog

from app.config import Settings, get_settings

logger = structlog.get_logger(__name__)

MAILGUN_EU_BASE = "https://api.eu.mailgun.net"


class NotificationSender(Protocol):
    """Delivers a message to an email address."""

    async def send(self, to: str, subject: str, text: str, html: Optional[str] = None) -> bool:
        ...

    async def aclose(self) -> None:
        ...


class ConsoleEmailSender:
    """Logs the email instead of delivering it."""

    async def send(self, to: str, subject: str, text: str, html: Optional[str] = None) -> bool:
        logger.info("Email (console)", to=to, subject=subject, text=text)
        return True

    async def aclose(self) -> None:
        return None


class MailgunEmailSender:
    """Client for the Mailgun messages API."""

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.domain = settings.MAILGUN_DOMAIN.strip().lower()
        self.base_url = (settings.MAILGUN_BASE_URL or "https://api.mailgun.net").strip().rstrip("/")
        self.api_key = settings.MAILGUN_API_KEY.strip()
        self.from_email = formataddr((settings.EMAIL_FROM_NAME, settings.EMAIL_FROM))
        self._client = client or httpx.AsyncClient(timeout=settings.EMAIL_TIMEOUT_SECONDS)

    @property
    def url(self) -> str:
        return f"{self.base_url}/v3/{self.domain}/messages"

    async def send(self, to: str, subject: str, text: str, html: Optional[str] = None) -> bool:
        if not self.api_key or not self.domain:
            logger.warning("Mailgun not configured", has_key=bool(self.api_key), has_domain=bool(self.domain))
            return False

        data = {
            "from": self.from_email,
            "to": to,
            "subject": subject,
            "text": text,
            "html": html or "",
        }
        try:
            response = await self._client.post(self.url, auth=("api", self.api_key), data=data)
        except httpx.HTTPError as e:
            logger.error("Mailgun connection error", to=to, error=f"{type(e).__name__}: {e}")
            return False

        if response.is_success:
            logger.info("Mailgun accepted message", to=to, status_code=response.status_code)
            return True

        logger.error(
            "Mailgun rejected message",
            to=to,
            status_code=response.status_code,
            body=response.text[:500],
        )
        return False

    async def aclose(self) -> None:
        await self._client.aclose()


class SmtpEmailSender:
    """Plain SMTP delivery. smtplib blocks, so each send runs in a thread."""

    def __init__(self, settings: Settings):
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.user = settings.SMTP_USER
        self.password = settings.SMTP_PASSWORD
        self.use_ssl = settings.SMTP_USE_SSL
        self.timeout = settings.EMAIL_TIMEOUT_SECONDS
        self.from_email = formataddr((settings.EMAIL_FROM_NAME, settings.EMAIL_FROM or settings.SMTP_USER))

    def _build_message(self, to: str, subject: str, text: str, html: Optional[str]) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = self.from_email
        msg["To"] = to
        msg["Subject"] = subject
        msg.attach(MIMEText(text, "plain", "utf-8"))
        if html:
            msg.attach(MIMEText(html, "html", "utf-8"))
        return msg

    def _deliver(self, msg: MIMEMultipart) -> None:
        if self.use_ssl:
            server = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        with server:
            if not self.use_ssl:
                server.starttls()
            if self.user:
                server.login(self.user, self.password)
            server.send_message(msg)

    async def send(self, to: str, subject: str, text: str, html: Optional[str] = None) -> bool:
        msg = self._build_message(to, subject, text, html)
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP send failed", to=to, host=self.host, error=f"{type(e).__name__}: {e}")
            return False
        logger.info("SMTP message sent", to=to)
        return True

    async def aclose(self) -> None:
        return None


def build_notification_sender(settings: Optional[Settings] = None) -> NotificationSender:
    """Pick the sender named by EMAIL_PROVIDER."""
    settings = settings or get_settings()
    provider = settings.EMAIL_PROVIDER.strip().lower()

    if provider == "mailgun":
        return MailgunEmailSender(settings)
    if provider == "smtp":
        return SmtpEmailSender(settings)
    if provider != "console":
        logger.warning("Unknown EMAIL_PROVIDER, falling back to console", provider=provider)
    return ConsoleEmailSender()
