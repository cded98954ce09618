"""Utility modules for common operations.

- Field updates with change tracking
- Retry with exponential backoff
- Half-up percentages
"""

from doease.utils.numbers import percent
from doease.utils.retry import RetryError, retry
from doease.utils.updates import UpdateResult, apply_updates

__all__ = [
    "RetryError",
    "UpdateResult",
    "apply_updates",
    "percent",
    "retry",
]
