# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Allocations — forecast commitments of a member's weekly hours.

Referential rules are checked here before any write; the store's own
constraints remain the backstop.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from app.core.errors import ConstraintError, NotFoundError, ValidationError
from app.core.logging import get_logger
from app.metrics import ALLOCATIONS_CREATED, VALIDATION_FAILURES
from app.repositories.allocation_repository import AllocationRepository
from app.repositories.team_member_repository import TeamMemberRepository
from app.repositories.work_item_repository import WorkItemRepository
from app.services.work_item_validator import validate_date_range

logger = get_logger(__name__)


class AllocationService:
    """Business logic for allocations."""

    def __init__(
        self,
        allocation_repo: AllocationRepository,
        member_repo: TeamMemberRepository,
        work_item_repo: WorkItemRepository,
    ) -> None:
        self._allocations = allocation_repo
        self._members = member_repo
        self._items = work_item_repo

    # ── Commands ──

    def create_allocation(self, payload: dict[str, Any]) -> dict[str, Any]:
        self._check_dates(payload["start_date"], payload.get("end_date"))
        if not self._members.exists(payload["team_member_id"]):
            raise ConstraintError(f"Team member {payload['team_member_id']} does not exist")
        if not self._items.exists(payload["work_item_id"]):
            raise ConstraintError(f"Work item {payload['work_item_id']} does not exist")

        now = datetime.now(timezone.utc).isoformat()
        allocation = self._allocations.create({
            "id": str(uuid.uuid4()),
            "team_member_id": payload["team_member_id"],
            "work_item_id": payload["work_item_id"],
            "hours_per_week": payload["hours_per_week"],
            "start_date": payload["start_date"],
            "end_date": payload.get("end_date"),
            "notes": payload.get("notes") or "",
            "created_at": now,
            "updated_at": now,
        })
        ALLOCATIONS_CREATED.inc()
        logger.info("Allocation created id=%s member=%s work_item=%s hours=%s",
                    allocation["id"], allocation["team_member_id"],
                    allocation["work_item_id"], allocation["hours_per_week"])
        return allocation

    def update_allocation(self, allocation_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        current = self._allocations.get(allocation_id)
        if current is None:
            raise NotFoundError("Allocation", allocation_id)
        self._check_dates(
            updates.get("start_date", current["start_date"]),
            updates.get("end_date", current["end_date"]),
        )
        if not updates:
            return current
        fields = dict(updates)
        fields["updated_at"] = datetime.now(timezone.utc).isoformat()
        allocation = self._allocations.update(allocation_id, fields)
        logger.info("Allocation updated id=%s fields=%s", allocation_id, sorted(updates))
        return allocation

    def delete_allocation(self, allocation_id: str) -> dict[str, Any]:
        if not self._allocations.delete(allocation_id):
            raise NotFoundError("Allocation", allocation_id)
        logger.info("Allocation deleted id=%s", allocation_id)
        return {"status": "deleted", "id": allocation_id}

    # ── Queries ──

    def get_allocation(self, allocation_id: str) -> dict[str, Any]:
        allocation = self._allocations.get(allocation_id)
        if allocation is None:
            raise NotFoundError("Allocation", allocation_id)
        return allocation

    def list_allocations(self, team_member_id: Optional[str] = None,
                         work_item_id: Optional[str] = None) -> list[dict[str, Any]]:
        return self._allocations.list_allocations(team_member_id, work_item_id)

    # ── Private ──

    @staticmethod
    def _check_dates(start, end) -> None:
        try:
            validate_date_range(start, end)
        except ValidationError as exc:
            VALIDATION_FAILURES.labels(entity="allocation", field=exc.field or "unknown").inc()
            raise
