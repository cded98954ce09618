"""Client session: sign in, run the streak check, then raise task alerts."""

from __future__ import annotations

import asyncio

import click

from doease.cli.utils import coro, detail, error, info, success, warning
from doease.client import DoEaseAPIError, DoEaseClient, LoggingNotifier, NotificationDispatcher
from doease.core.settings import get_client_settings


@click.command(name="watch")
@click.option("--email", prompt=True, help="Account email")
@click.option("--password", prompt=True, hide_input=True, help="Account password")
@click.option("--base-url", default=None, help="API base URL (default: CLIENT_API_BASE_URL)")
@click.option(
    "--interval",
    default=None,
    type=float,
    help="Poll interval in seconds (default: CLIENT_POLL_INTERVAL_SECONDS)",
)
@coro
async def watch(email: str, password: str, base_url: str | None, interval: float | None) -> None:
    """Watch your tasks and raise start/end notifications until interrupted."""
    settings = get_client_settings()
    async with DoEaseClient(
        base_url or settings.api_base_url,
        timeout=settings.request_timeout,
        timezone=settings.timezone,
    ) as client:
        try:
            await client.sign_in(email, password)
        except DoEaseAPIError as exc:
            error(f"Sign-in failed: {exc.detail}")
            raise SystemExit(1) from exc

        streak = await client.check_streak()
        if streak.action == "reset":
            warning("You missed a day; your streak has been reset.")
        else:
            success(f"Current streak: {streak.current_streak} day(s)")

        dispatcher = NotificationDispatcher(
            client.list_tasks,
            LoggingNotifier(),
            interval=interval or settings.poll_interval_seconds,
        )
        if not await dispatcher.start():
            warning("Notifications are not permitted; nothing to watch.")
            return

        detail("interval", f"{interval or settings.poll_interval_seconds:g}s")
        info("Watching tasks. Press Ctrl+C to stop.")
        try:
            await asyncio.Event().wait()
        finally:
            await dispatcher.stop()
            await client.sign_out()
