"""Base email provider protocol and abstract class.

Defines the contract that all email providers implement.

Usage:
    class MyProvider(BaseEmailProvider):
        @property
        def provider_name(self) -> str:
            return "myprovider"

        async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
            ...
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from doease.infra.metrics.prometheus import email_send_duration_seconds

if TYPE_CHECKING:
    from doease.infra.email.schemas import EmailMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailDeliveryResult:
    """Result of an email delivery attempt.

    Attributes:
        success: Whether delivery succeeded
        message_id: Provider-assigned message ID (for tracking)
        provider: Provider name (resend, console)
        error: Error message if failed
        error_code: Error category for programmatic handling
        duration_ms: Time taken to send in milliseconds
        metadata: Provider-specific metadata
    """

    success: bool
    message_id: str | None
    provider: str
    error: str | None = None
    error_code: str | None = None
    duration_ms: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.success and not self.error:
            object.__setattr__(self, "error", "Unknown error")

    @classmethod
    def success_result(
        cls,
        message_id: str,
        provider: str,
        duration_ms: int | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> EmailDeliveryResult:
        return cls(
            success=True,
            message_id=message_id,
            provider=provider,
            duration_ms=duration_ms,
            metadata=metadata or {},
        )

    @classmethod
    def failure_result(
        cls,
        provider: str,
        error: str,
        error_code: str | None = None,
        duration_ms: int | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> EmailDeliveryResult:
        return cls(
            success=False,
            message_id=None,
            provider=provider,
            error=error,
            error_code=error_code,
            duration_ms=duration_ms,
            metadata=metadata or {},
        )


@runtime_checkable
class EmailProvider(Protocol):
    """Protocol defining the email provider interface.

    Example:
        result = await provider.send(message)
        if result.success:
            print(f"Sent: {result.message_id}")
    """

    async def send(self, message: EmailMessage) -> EmailDeliveryResult:
        """Send an email message; failures come back as a failed result."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the provider name (e.g., 'resend', 'console')."""
        ...


class BaseEmailProvider(ABC):
    """Abstract base class for email providers.

    Wraps ``_do_send`` with timing, logging and error handling; an
    exception inside a provider becomes a failed EmailDeliveryResult.
    """

    def __init__(self, default_sender: str | None = None) -> None:
        self._default_sender = default_sender
        logger.info(
            f"{self.provider_name} provider initialized",
            extra={"provider": self.provider_name, "sender": default_sender},
        )

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
        """Implement the actual sending logic."""
        ...

    async def aclose(self) -> None:
        """Release resources held by the provider (none by default)."""

    def _sender_for(self, message: EmailMessage) -> str | None:
        return message.sender or self._default_sender

    async def send(self, message: EmailMessage) -> EmailDeliveryResult:
        """Send an email with timing and error handling."""
        start_time = time.perf_counter()

        try:
            result = await self._do_send(message)
        except Exception as e:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.exception(
                f"Unexpected error in {self.provider_name} provider",
                extra={"provider": self.provider_name, "error": str(e), "duration_ms": duration_ms},
            )
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error=str(e),
                error_code="UNEXPECTED_ERROR",
                duration_ms=duration_ms,
            )

        elapsed = time.perf_counter() - start_time
        email_send_duration_seconds.labels(provider=self.provider_name).observe(elapsed)
        if result.duration_ms is None:
            result = replace(result, duration_ms=int(elapsed * 1000))

        if result.success:
            logger.info(
                f"Email sent via {self.provider_name}",
                extra={
                    "message_id": result.message_id,
                    "provider": self.provider_name,
                    "recipients": len(message.to),
                    "duration_ms": result.duration_ms,
                },
            )
        else:
            logger.warning(
                f"Email send failed via {self.provider_name}",
                extra={
                    "provider": self.provider_name,
                    "error": result.error,
                    "error_code": result.error_code,
                    "duration_ms": result.duration_ms,
                },
            )
        return result
