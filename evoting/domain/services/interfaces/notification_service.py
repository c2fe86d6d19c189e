"""Outbound notification interface."""

from typing import Any, Protocol


class INotificationService(Protocol):
    """Fire-and-forget e-mail dispatch.

    Implementations must not raise on delivery failure; they log it.
    """

    async def send(self, to: str, template_id: str, context: dict[str, Any]) -> None:
        """Dispatch a message.

        Args:
            to: Recipient e-mail address
            template_id: Identifier of the message kind
            context: Values referenced by the message body
        """
        ...
