# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Work-item status taxonomy — pure lookups, no side effects.

Single source of truth for which statuses are legal for which work-item
type. Consulted by the mutation validator and served to UIs as-is.
"""

from typing import Any

FALLBACK_STATUS = "draft"

# Ordered; the first entry of each tuple is the default status.
STATUSES_BY_TYPE: dict[str, tuple[str, ...]] = {
    "demand": (
        "draft", "submitted", "screened", "qualified-approved",
        "complete", "deferred", "rejected",
    ),
    "project": ("initiating", "planning", "executing", "delivering", "closing"),
    "om": ("planned", "active", "on-hold", "completed"),
}

WORK_ITEM_TYPES: tuple[str, ...] = tuple(STATUSES_BY_TYPE)


def valid_statuses_for(item_type: str) -> tuple[str, ...]:
    return STATUSES_BY_TYPE.get(item_type, ())


def default_status_for(item_type: str) -> str:
    statuses = valid_statuses_for(item_type)
    return statuses[0] if statuses else FALLBACK_STATUS


def format_label(status: str) -> str:
    """'qualified-approved' -> 'Qualified Approved'."""
    return " ".join(word.capitalize() for word in status.split("-"))


def status_catalog() -> dict[str, Any]:
    return {
        item_type: {
            "default": default_status_for(item_type),
            "statuses": [
                {"value": s, "label": format_label(s)} for s in statuses
            ],
        }
        for item_type, statuses in STATUSES_BY_TYPE.items()
    }
