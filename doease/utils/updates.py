"""Partial updates with change tracking.

Example:
    result = apply_updates(profile, payload, fields=["username", "mobile"])
    if result.applied:
        logger.info("Profile updated", extra={"changes": result.changes})
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class UpdateResult:
    """Result of applying updates to an entity.

    Attributes:
        applied: True if any changes were made.
        changes: Field names mapped to their new values.
    """

    applied: bool = False
    changes: dict[str, Any] = field(default_factory=dict)


def apply_updates(
    entity: Any,
    payload: Mapping[str, Any] | Any,
    *,
    fields: list[str] | None = None,
    exclude: set[str] | None = None,
    skip_none: bool = True,
) -> UpdateResult:
    """Apply partial updates from payload to entity with change tracking.

    Args:
        entity: Target entity (SQLAlchemy model, dataclass, etc.) to update.
        payload: A dict or Pydantic model. Pydantic payloads only contribute
            explicitly set fields.
        fields: Specific fields to update. If None, every field in the payload.
        exclude: Fields never touched (e.g., {"id", "current_streak"}).
        skip_none: If True (default), None values in payload are skipped.
            Set False to allow explicitly clearing nullable fields.

    Returns:
        UpdateResult describing what changed.
    """
    exclude = exclude or set()
    changes: dict[str, Any] = {}

    if hasattr(payload, "model_dump"):
        payload_dict = payload.model_dump(exclude_unset=True)
    elif isinstance(payload, Mapping):
        payload_dict = dict(payload)
    else:
        payload_dict = {k: v for k, v in vars(payload).items() if not k.startswith("_")}

    if fields is None:
        fields_to_update = [k for k in payload_dict if k not in exclude]
    else:
        fields_to_update = [f for f in fields if f not in exclude]

    for field_name in fields_to_update:
        if field_name not in payload_dict:
            continue

        new_value = payload_dict[field_name]
        if skip_none and new_value is None:
            continue

        if getattr(entity, field_name, None) != new_value:
            setattr(entity, field_name, new_value)
            changes[field_name] = new_value

    return UpdateResult(applied=bool(changes), changes=changes)
