"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (app, db, logging, email, auth, jobs, client),
each reading its own environment prefix, and are frozen after validation.

Import settings via cached loaders (recommended):
    from doease.core.settings import get_app_settings

Or use unified settings for convenient access to all domains:
    from doease.core.settings import get_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file (development only)
"""

from __future__ import annotations

from .loader import (
    clear_all_caches,
    get_app_settings,
    get_auth_settings,
    get_client_settings,
    get_db_settings,
    get_email_settings,
    get_job_settings,
    get_logging_settings,
)
from .unified import Settings, get_settings

__all__ = [
    "Settings",
    "clear_all_caches",
    "get_app_settings",
    "get_auth_settings",
    "get_client_settings",
    "get_db_settings",
    "get_email_settings",
    "get_job_settings",
    "get_logging_settings",
    "get_settings",
]
