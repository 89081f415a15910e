# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Work-item mutation validation — pure pass/fail, no storage access.

Callers hand in the stored record on update; the validator never loads it.
"""

from typing import Any, Optional

from app.core.errors import ValidationError
from app.services.status_taxonomy import (
    WORK_ITEM_TYPES,
    format_label,
    valid_statuses_for,
)


def _check_pair(item_type: Optional[str], status: Optional[str]) -> None:
    if not item_type:
        raise ValidationError("type is required", field="type")
    if item_type not in WORK_ITEM_TYPES:
        raise ValidationError(
            f"type must be one of {WORK_ITEM_TYPES}, got '{item_type}'", field="type"
        )
    if not status:
        raise ValidationError("status is required", field="status")
    allowed = valid_statuses_for(item_type)
    if status not in allowed:
        raise ValidationError(
            f"'{status}' is not a valid status for type '{item_type}'. "
            f"Allowed: {', '.join(format_label(s) for s in allowed)}",
            field="status",
        )


def validate_work_item_create(candidate: dict[str, Any]) -> None:
    """Raises ValidationError unless (type, status) is a legal pair."""
    _check_pair(candidate.get("type"), candidate.get("status"))


def validate_work_item_update(
    updates: dict[str, Any], current: dict[str, Any]
) -> None:
    """Validate a partial update against the stored record.

    When only one of type/status is supplied, the other comes from
    ``current`` so the merged pair is what gets checked.
    """
    if "type" not in updates and "status" not in updates:
        return
    merged_type = updates.get("type", current.get("type"))
    merged_status = updates.get("status", current.get("status"))
    _check_pair(merged_type, merged_status)


def validate_date_range(start, end, field: str = "end_date") -> None:
    if end is not None and start is not None and end < start:
        raise ValidationError(
            f"{field} ({end.isoformat()}) is before start_date ({start.isoformat()})",
            field=field,
        )
