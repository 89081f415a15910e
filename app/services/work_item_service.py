# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Work items — CRUD guarded by the type/status validator.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from app.core.errors import NotFoundError, ValidationError
from app.core.logging import get_logger
from app.metrics import VALIDATION_FAILURES, WORK_ITEMS_CREATED
from app.repositories.allocation_repository import AllocationRepository
from app.repositories.work_item_repository import WorkItemRepository
from app.services import capacity
from app.services.status_taxonomy import default_status_for, format_label
from app.services.work_item_validator import (
    validate_work_item_create,
    validate_work_item_update,
)

logger = get_logger(__name__)


def _present(item: dict[str, Any]) -> dict[str, Any]:
    return {**item, "status_label": format_label(item["status"])}


class WorkItemService:
    """Business logic for work items."""

    def __init__(
        self,
        work_item_repo: WorkItemRepository,
        allocation_repo: AllocationRepository,
    ) -> None:
        self._items = work_item_repo
        self._allocations = allocation_repo

    # ── Commands ──

    def create_work_item(self, payload: dict[str, Any]) -> dict[str, Any]:
        candidate = dict(payload)
        if candidate.get("status") is None and candidate.get("type"):
            candidate["status"] = default_status_for(candidate["type"])
        self._validate(validate_work_item_create, candidate)

        now = datetime.now(timezone.utc).isoformat()
        record = {
            "id": str(uuid.uuid4()),
            "title": candidate["title"],
            "description": candidate.get("description") or "",
            "type": candidate["type"],
            "priority": candidate.get("priority") or "normal",
            "status": candidate["status"],
            "estimated_hours": candidate.get("estimated_hours") or 0,
            "due_date": candidate.get("due_date"),
            "created_at": now,
            "updated_at": now,
        }
        item = self._items.create(record)
        WORK_ITEMS_CREATED.labels(type=item["type"]).inc()
        logger.info("Work item created id=%s type=%s status=%s",
                    item["id"], item["type"], item["status"])
        return self._with_allocations(item)

    def update_work_item(self, item_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        current = self._items.get(item_id)
        if current is None:
            raise NotFoundError("Work item", item_id)
        self._validate(validate_work_item_update, updates, current)

        if updates:
            fields = dict(updates)
            fields["updated_at"] = datetime.now(timezone.utc).isoformat()
            self._items.update(item_id, fields)
            if "status" in updates and updates["status"] != current["status"]:
                logger.info("Work item status changed id=%s from=%s to=%s",
                            item_id, current["status"], updates["status"])
            logger.info("Work item updated id=%s fields=%s", item_id, sorted(updates))
        return self.get_work_item(item_id)

    def delete_work_item(self, item_id: str) -> dict[str, Any]:
        removed = self._items.delete(item_id)
        if removed is None:
            raise NotFoundError("Work item", item_id)
        logger.info("Work item deleted id=%s allocations_removed=%d", item_id, removed)
        return {"status": "deleted", "id": item_id, "allocations_removed": removed}

    # ── Queries ──

    def get_work_item(self, item_id: str) -> dict[str, Any]:
        item = self._items.get(item_id)
        if item is None:
            raise NotFoundError("Work item", item_id)
        return self._with_allocations(item)

    def list_work_items(self, item_type: Optional[str] = None, status: Optional[str] = None,
                        priority: Optional[str] = None) -> list[dict[str, Any]]:
        items = self._items.list_items(item_type, status, priority)
        allocations = self._allocations.list_allocations()
        by_item: dict[str, list[dict[str, Any]]] = {}
        for a in allocations:
            by_item.setdefault(a["work_item_id"], []).append(a)
        return [
            {
                **_present(item),
                "allocations": by_item.get(item["id"], []),
                "total_allocated_hours": capacity.total_allocated_hours(
                    by_item.get(item["id"], []), item["id"]
                ),
            }
            for item in items
        ]

    # ── Private ──

    def _with_allocations(self, item: dict[str, Any]) -> dict[str, Any]:
        allocations = self._allocations.list_allocations(work_item_id=item["id"])
        return {
            **_present(item),
            "allocations": allocations,
            "total_allocated_hours": capacity.total_allocated_hours(allocations, item["id"]),
        }

    @staticmethod
    def _validate(check, *args) -> None:
        try:
            check(*args)
        except ValidationError as exc:
            VALIDATION_FAILURES.labels(entity="work_item", field=exc.field or "unknown").inc()
            logger.warning("Work item rejected field=%s reason=%s", exc.field, exc.message)
            raise
