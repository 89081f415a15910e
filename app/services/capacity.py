# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Capacity aggregation — pure computation, no I/O, no metrics.

Every figure here is derived from a snapshot of allocation rows at read
time and must never be persisted. Rows are the plain dicts produced by the
repositories (``hours_per_week``, ``start_date``, ``end_date``, ...).
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional

from app.services.status_taxonomy import WORK_ITEM_TYPES

OVER_CAPACITY_THRESHOLD = 100
BUSY_THRESHOLD = 70
AVAILABLE_THRESHOLD = 40

CAPACITY_LABELS: dict[str, str] = {
    "over-capacity": "At/Over Capacity",
    "busy": "Busy",
    "available": "Available",
    "light-load": "Light Load",
}


def _decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _number(value: Decimal) -> float:
    return float(value)


def is_active_on(allocation: dict[str, Any], today: date) -> bool:
    """Active when start_date <= today and the range is open or not yet ended."""
    start = allocation["start_date"]
    end = allocation.get("end_date")
    return start <= today and (end is None or end >= today)


def allocated_hours(
    allocations: Iterable[dict[str, Any]],
    team_member_id: str,
    today: Optional[date] = None,
) -> float:
    today = today or date.today()
    total = sum(
        (
            _decimal(a["hours_per_week"])
            for a in allocations
            if a["team_member_id"] == team_member_id and is_active_on(a, today)
        ),
        Decimal("0"),
    )
    return _number(total)


def available_hours(weekly_hours: int, allocated: float) -> float:
    """Negative when the member is over-committed."""
    return _number(_decimal(weekly_hours) - _decimal(allocated))


def capacity_percentage(allocated: float, weekly_hours: int) -> int:
    if not weekly_hours or weekly_hours <= 0:
        return 0
    return _round_half_up(_decimal(allocated) / _decimal(weekly_hours) * 100)


def classify_capacity(percentage: int) -> str:
    if percentage >= OVER_CAPACITY_THRESHOLD:
        return "over-capacity"
    if percentage >= BUSY_THRESHOLD:
        return "busy"
    if percentage >= AVAILABLE_THRESHOLD:
        return "available"
    return "light-load"


def member_stats(
    member: dict[str, Any],
    allocations: Iterable[dict[str, Any]],
    today: Optional[date] = None,
) -> dict[str, Any]:
    """Stats block merged into TeamMemberWithStats."""
    allocated = allocated_hours(allocations, member["id"], today)
    percentage = capacity_percentage(allocated, member["weekly_hours"])
    status = classify_capacity(percentage)
    return {
        "allocated_hours": allocated,
        "available_hours": available_hours(member["weekly_hours"], allocated),
        "capacity_percentage": percentage,
        "capacity_status": status,
        "capacity_label": CAPACITY_LABELS[status],
    }


def total_allocated_hours(
    allocations: Iterable[dict[str, Any]], work_item_id: str
) -> float:
    # Deliberately not date-filtered: the work-item total counts every
    # allocation ever made against it, unlike the per-member view.
    total = sum(
        (
            _decimal(a["hours_per_week"])
            for a in allocations
            if a["work_item_id"] == work_item_id
        ),
        Decimal("0"),
    )
    return _number(total)


def team_stats(
    members: Iterable[dict[str, Any]],
    work_items: Iterable[dict[str, Any]],
    allocations: Iterable[dict[str, Any]],
    today: Optional[date] = None,
) -> dict[str, Any]:
    """Roster-wide figures over active members only."""
    today = today or date.today()
    allocations = list(allocations)
    active = [m for m in members if m["is_active"]]
    active_ids = {m["id"] for m in active}
    type_by_item = {w["id"]: w["type"] for w in work_items}

    percentages = [member_stats(m, allocations, today)["capacity_percentage"] for m in active]
    distribution = {status: 0 for status in CAPACITY_LABELS}
    for pct in percentages:
        distribution[classify_capacity(pct)] += 1

    hours_by_type = {t: Decimal("0") for t in WORK_ITEM_TYPES}
    for a in allocations:
        item_type = type_by_item.get(a["work_item_id"])
        if item_type is None or a["team_member_id"] not in active_ids:
            continue
        if is_active_on(a, today):
            hours_by_type[item_type] = hours_by_type.get(item_type, Decimal("0")) + _decimal(
                a["hours_per_week"]
            )

    average = (
        _round_half_up(Decimal(sum(percentages)) / Decimal(len(percentages)))
        if percentages
        else 0
    )
    return {
        "total_members": len(active),
        "average_capacity": average,
        "overallocated_members": distribution["over-capacity"],
        "hours_by_type": {t: _number(h) for t, h in hours_by_type.items()},
        "capacity_distribution": distribution,
    }
