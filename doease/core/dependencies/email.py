"""Email provider dependency.

The provider is built in the lifespan and kept on ``app.state``; without a
lifespan it is built from settings on first use.

Testing:
    app.dependency_overrides[get_email_provider] = lambda: RecordingEmailProvider()
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from doease.core.settings import get_email_settings
from doease.infra.email import EmailProvider, build_email_provider


def get_email_provider(request: Request) -> EmailProvider:
    """Return the EmailProvider attached to the application.

    Raises:
        ConfigurationException: The configured backend lacks its key or sender.
    """
    provider = getattr(request.app.state, "email_provider", None)
    if provider is None:
        provider = build_email_provider(get_email_settings())
        request.app.state.email_provider = provider
    return provider


EmailProviderDep = Annotated[EmailProvider, Depends(get_email_provider)]
