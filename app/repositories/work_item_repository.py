# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Work item data access — pure CRUD, no business rules.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.repositories.helpers import (
    as_date,
    as_float,
    bind_date,
    constraint_guard,
    iso_timestamp,
    update_row,
)

WORK_ITEM_COLS = (
    "id, title, description, type, priority, status, estimated_hours, "
    "due_date, created_at, updated_at"
)

UPDATABLE = (
    "title", "description", "type", "priority", "status",
    "estimated_hours", "due_date", "updated_at",
)


def _row_to_dict(row) -> Dict[str, Any]:
    return {
        "id": str(row[0]),
        "title": row[1],
        "description": row[2] or "",
        "type": row[3],
        "priority": row[4],
        "status": row[5],
        "estimated_hours": as_float(row[6]),
        "due_date": as_date(row[7]),
        "created_at": iso_timestamp(row[8]),
        "updated_at": iso_timestamp(row[9]),
    }


def _encode(record: Dict[str, Any]) -> Dict[str, Any]:
    params = dict(record)
    if "due_date" in params:
        params["due_date"] = bind_date(params["due_date"])
    return params


class WorkItemRepository:
    """Handles all direct database operations for work items."""

    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Write ──────────────────────────────────────────────────────────

    def create(self, record: Dict[str, Any]) -> Dict[str, Any]:
        with constraint_guard("Work item"), self._engine.begin() as conn:
            conn.execute(
                text("""
                    INSERT INTO work_items
                        (id, title, description, type, priority, status,
                         estimated_hours, due_date, created_at, updated_at)
                    VALUES
                        (:id, :title, :description, :type, :priority, :status,
                         :estimated_hours, :due_date, :created_at, :updated_at)
                """),
                _encode(record),
            )
        return self.get(record["id"])

    def update(self, item_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with constraint_guard("Work item"), self._engine.begin() as conn:
            update_row(conn, "work_items", item_id, _encode(fields), UPDATABLE)
        return self.get(item_id)

    def delete(self, item_id: str) -> Optional[int]:
        """Delete the item and its allocations. Returns allocations removed, None if absent."""
        with self._engine.begin() as conn:
            exists = conn.execute(
                text("SELECT 1 FROM work_items WHERE id = :id"), {"id": item_id}
            ).fetchone()
            if not exists:
                return None
            removed = conn.execute(
                text("DELETE FROM allocations WHERE work_item_id = :id"), {"id": item_id}
            ).rowcount
            conn.execute(text("DELETE FROM work_items WHERE id = :id"), {"id": item_id})
        return removed

    # ── Read ───────────────────────────────────────────────────────────

    def get(self, item_id: str) -> Optional[Dict[str, Any]]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(f"SELECT {WORK_ITEM_COLS} FROM work_items WHERE id = :id"),
                {"id": item_id},
            ).fetchone()
        return _row_to_dict(row) if row else None

    def list_items(self, item_type: Optional[str] = None, status: Optional[str] = None,
                   priority: Optional[str] = None) -> List[Dict[str, Any]]:
        conditions = []
        params: Dict[str, Any] = {}
        if item_type:
            conditions.append("type = :type")
            params["type"] = item_type.lower()
        if status:
            conditions.append("status = :status")
            params["status"] = status.lower()
        if priority:
            conditions.append("priority = :priority")
            params["priority"] = priority.lower()
        where = (" WHERE " + " AND ".join(conditions)) if conditions else ""

        with self._engine.connect() as conn:
            rows = conn.execute(
                text(f"SELECT {WORK_ITEM_COLS} FROM work_items{where} ORDER BY created_at DESC"),
                params,
            ).fetchall()
        return [_row_to_dict(r) for r in rows]

    def exists(self, item_id: str) -> bool:
        with self._engine.connect() as conn:
            return conn.execute(
                text("SELECT 1 FROM work_items WHERE id = :id"), {"id": item_id}
            ).fetchone() is not None
