"""Companion client: API access and the notification dispatcher."""

from doease.client.api import DoEaseAPIError, DoEaseClient
from doease.client.dispatcher import NotificationDispatcher, SessionSentRegistry
from doease.client.models import ClientStreak, ClientTask
from doease.client.notifier import LoggingNotifier, Notifier

__all__ = [
    "ClientStreak",
    "ClientTask",
    "DoEaseAPIError",
    "DoEaseClient",
    "LoggingNotifier",
    "NotificationDispatcher",
    "Notifier",
    "SessionSentRegistry",
]
