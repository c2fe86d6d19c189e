"""Tests for SmtpNotificationService."""

from unittest.mock import MagicMock, patch

import pytest

from evoting.infrastructure.config.settings import Settings
from evoting.infrastructure.external.smtp_notification_service import (
    SmtpNotificationService,
)


SMTP_PATH = "evoting.infrastructure.external.smtp_notification_service.smtplib.SMTP"


def _configured() -> Settings:
    return Settings(
        smtp_host="smtp.example.com",
        smtp_port=2525,
        smtp_user="mailer",
        smtp_password="secret",
        smtp_from="noreply@example.com",
    )


def test_builds_message_from_template() -> None:
    service = SmtpNotificationService(_configured())

    message = service._build_message(
        "ada@example.com",
        "verify_email",
        {"name": "Ada", "verify_url": "https://vote.example.com/verify-email/abc"},
    )

    assert message["To"] == "ada@example.com"
    assert message["From"] == "noreply@example.com"
    assert message["Subject"] == "Verify your e-mail"
    assert "https://vote.example.com/verify-email/abc" in message.get_content()


@pytest.mark.asyncio
async def test_delivers_when_configured() -> None:
    service = SmtpNotificationService(_configured())

    with patch(SMTP_PATH) as smtp_class:
        smtp = smtp_class.return_value.__enter__.return_value
        await service.send(
            "ada@example.com", "whitelist_accept", {"election_name": "Council"}
        )
        await service.wait_pending()

    smtp_class.assert_called_once_with("smtp.example.com", 2525, timeout=10)
    smtp.starttls.assert_called_once()
    smtp.login.assert_called_once_with("mailer", "secret")
    sent = smtp.send_message.call_args.args[0]
    assert "Council" in sent.get_content()


@pytest.mark.asyncio
async def test_skips_delivery_without_smtp_host() -> None:
    service = SmtpNotificationService(Settings(smtp_host=None))

    with patch(SMTP_PATH) as smtp_class:
        await service.send(
            "ada@example.com", "whitelist_decline", {"election_name": "Council"}
        )
        await service.wait_pending()

    smtp_class.assert_not_called()


@pytest.mark.asyncio
async def test_delivery_failure_does_not_raise() -> None:
    service = SmtpNotificationService(_configured())

    with patch(SMTP_PATH, side_effect=OSError("connection refused")):
        await service.send(
            "ada@example.com", "whitelist_accept", {"election_name": "Council"}
        )
        await service.wait_pending()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("template_id", "context"),
    [("unknown", {}), ("verify_email", {"name": "Ada"})],
)
async def test_bad_template_is_logged_not_sent(
    template_id: str, context: dict
) -> None:
    service = SmtpNotificationService(_configured())

    with patch(SMTP_PATH, new=MagicMock()) as smtp_class:
        await service.send("ada@example.com", template_id, context)
        await service.wait_pending()

    smtp_class.assert_not_called()
