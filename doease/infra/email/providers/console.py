"""Console email provider for development.

Logs emails instead of sending them. Every send succeeds.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from doease.infra.email.providers.base import BaseEmailProvider, EmailDeliveryResult

if TYPE_CHECKING:
    from doease.infra.email.schemas import EmailMessage

logger = logging.getLogger(__name__)


class ConsoleProvider(BaseEmailProvider):
    """Email provider that writes messages to the log."""

    @property
    def provider_name(self) -> str:
        return "console"

    async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
        message_id = f"console-{uuid.uuid4()}"
        sender = self._sender_for(message) or "(no sender configured)"

        separator = "=" * 60
        output = "\n".join(
            [
                "",
                separator,
                "EMAIL (Console Backend - Development Mode)",
                separator,
                f"Message-ID: {message_id}",
                f"From: {sender}",
                f"To: {', '.join(message.to)}",
                f"Subject: {message.subject}",
                separator,
                message.body_text or message.body_html,
                separator,
            ]
        )
        logger.info(output, extra={"message_id": message_id, "provider": self.provider_name})

        return EmailDeliveryResult.success_result(
            message_id=message_id,
            provider=self.provider_name,
        )
