"""SMTP e-mail notification service."""

import asyncio
import smtplib

from email.message import EmailMessage
from typing import Any, ClassVar

import structlog

from evoting.infrastructure.config.settings import Settings, get_settings


logger = structlog.get_logger(__name__)


class SmtpNotificationService:
    """Sends plain-text e-mails in the background.

    ``send`` schedules delivery and returns immediately. Delivery failures
    are logged and never reach the caller.
    """

    TEMPLATES: ClassVar[dict[str, tuple[str, str]]] = {
        "verify_email": (
            "Verify your e-mail",
            "Hello {name},\n\nConfirm your account by opening:\n{verify_url}\n",
        ),
        "reset_password": (
            "Reset your password",
            "Hello {name},\n\nSet a new password by opening:\n{reset_url}\n",
        ),
        "whitelist_accept": (
            "Whitelist request accepted",
            "Your request to vote in {election_name} has been accepted.\n",
        ),
        "whitelist_decline": (
            "Whitelist request declined",
            "Your request to vote in {election_name} has been declined.\n",
        ),
    }

    def __init__(self, config: Settings | None = None):
        self._config = config or get_settings()
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def is_configured(self) -> bool:
        return bool(self._config.smtp_host)

    async def send(self, to: str, template_id: str, context: dict[str, Any]) -> None:
        """Schedule an e-mail for delivery.

        Args:
            to: Recipient address
            template_id: Key of ``TEMPLATES``
            context: Values for the template placeholders
        """
        try:
            message = self._build_message(to, template_id, context)
        except (KeyError, IndexError) as e:
            logger.error(
                "Failed to build notification",
                to=to,
                template_id=template_id,
                error=str(e),
            )
            return

        task = asyncio.create_task(self._deliver(message, template_id))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def wait_pending(self) -> None:
        """Wait for every scheduled delivery to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def _build_message(
        self, to: str, template_id: str, context: dict[str, Any]
    ) -> EmailMessage:
        subject, body = self.TEMPLATES[template_id]
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self._config.smtp_from
        message["To"] = to
        message.set_content(body.format(**context))
        return message

    async def _deliver(self, message: EmailMessage, template_id: str) -> None:
        if not self.is_configured:
            logger.info(
                "SMTP not configured, notification not sent",
                to=message["To"],
                template_id=template_id,
            )
            return
        try:
            await asyncio.to_thread(self._send_sync, message)
            logger.info("Notification sent", to=message["To"], template_id=template_id)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                "Failed to send notification",
                to=message["To"],
                template_id=template_id,
                error=str(e),
            )

    def _send_sync(self, message: EmailMessage) -> None:
        config = self._config
        with smtplib.SMTP(config.smtp_host, config.smtp_port, timeout=10) as smtp:  # type: ignore[arg-type]
            if config.smtp_use_tls:
                smtp.starttls()
            if config.smtp_user and config.smtp_password:
                smtp.login(config.smtp_user, config.smtp_password)
            smtp.send_message(message)
