import httpx
import pytest

from app.config import Settings
from app.infrastructure.email_sender import (
    ConsoleEmailSender,
    MailgunEmailSender,
    SmtpEmailSender,
    build_notification_sender,
)


def mailgun_settings(**overrides):
    values = {
        "MAILGUN_API_KEY": "key-123",
        "MAILGUN_DOMAIN": "mg.example.com",
        "EMAIL_FROM": "noreply@mg.example.com",
        "EMAIL_FROM_NAME": "Food App",
    }
    values.update(overrides)
    return Settings(**values)


def mailgun_with(handler, **overrides):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return MailgunEmailSender(mailgun_settings(**overrides), client=client)


@pytest.mark.asyncio
async def test_mailgun_posts_message():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = request.content.decode()
        return httpx.Response(200, json={"id": "<1@mg>", "message": "Queued"})

    sender = mailgun_with(handler)
    ok = await sender.send("a@x.com", "Code", "Your code is 123456", "<b>123456</b>")
    await sender.aclose()

    assert ok is True
    assert seen["url"] == "https://api.mailgun.net/v3/mg.example.com/messages"
    assert seen["auth"].startswith("Basic ")
    assert "a%40x.com" in seen["body"]


@pytest.mark.asyncio
async def test_mailgun_rejection_returns_false():
    sender = mailgun_with(lambda request: httpx.Response(401, text="Forbidden"))

    assert await sender.send("a@x.com", "Code", "text") is False


@pytest.mark.asyncio
async def test_mailgun_connection_error_returns_false():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    sender = mailgun_with(handler)

    assert await sender.send("a@x.com", "Code", "text") is False


@pytest.mark.asyncio
async def test_mailgun_unconfigured_does_not_send():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200)

    sender = mailgun_with(handler, MAILGUN_API_KEY="")

    assert await sender.send("a@x.com", "Code", "text") is False
    assert calls == []


@pytest.mark.asyncio
async def test_smtp_failure_returns_false(monkeypatch):
    sender = SmtpEmailSender(Settings(SMTP_HOST="smtp.invalid", SMTP_USER="u", SMTP_PASSWORD="p"))

    def refuse(msg):
        raise ConnectionRefusedError("no smtp here")

    monkeypatch.setattr(sender, "_deliver", refuse)

    assert await sender.send("a@x.com", "Code", "text", "<p>html</p>") is False


def test_smtp_message_has_text_and_html_parts():
    sender = SmtpEmailSender(Settings(EMAIL_FROM="noreply@food.test", EMAIL_FROM_NAME="Food App"))

    msg = sender._build_message("a@x.com", "Code", "plain body", "<p>html body</p>")

    assert msg["To"] == "a@x.com"
    assert "noreply@food.test" in msg["From"]
    assert [part.get_content_type() for part in msg.get_payload()] == ["text/plain", "text/html"]


@pytest.mark.asyncio
async def test_console_sender_always_succeeds():
    assert await ConsoleEmailSender().send("a@x.com", "Code", "text") is True


@pytest.mark.parametrize("provider,expected", [
    ("console", ConsoleEmailSender),
    ("SMTP", SmtpEmailSender),
    ("mailgun", MailgunEmailSender),
    ("carrier-pigeon", ConsoleEmailSender),
])
def test_build_notification_sender(provider, expected):
    assert isinstance(build_notification_sender(Settings(EMAIL_PROVIDER=provider)), expected)
