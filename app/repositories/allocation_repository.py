# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Allocation data access — pure CRUD, no business rules.
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

ALLOCATION_COLS = (
    "a.id, a.team_member_id, a.work_item_id, a.hours_per_week, a.start_date, "
    "a.end_date, a.notes, a.created_at, a.updated_at, m.name, w.title"
)

ALLOCATION_FROM = (
    "allocations a "
    "LEFT JOIN team_members m ON m.id = a.team_member_id "
    "LEFT JOIN work_items w ON w.id = a.work_item_id"
)

UPDATABLE = ("hours_per_week", "start_date", "end_date", "notes", "updated_at")


def _row_to_dict(row) -> Dict[str, Any]:
    return {
        "id": str(row[0]),
        "team_member_id": str(row[1]),
        "work_item_id": str(row[2]),
        "hours_per_week": as_float(row[3]),
        "start_date": as_date(row[4]),
        "end_date": as_date(row[5]),
        "notes": row[6] or "",
        "created_at": iso_timestamp(row[7]),
        "updated_at": iso_timestamp(row[8]),
        "team_member_name": row[9],
        "work_item_title": row[10],
    }


def _encode(record: Dict[str, Any]) -> Dict[str, Any]:
    params = dict(record)
    for key in ("start_date", "end_date"):
        if key in params:
            params[key] = bind_date(params[key])
    return params


class AllocationRepository:
    """Handles all direct database operations for allocations."""

    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Write ──────────────────────────────────────────────────────────

    def create(self, record: Dict[str, Any]) -> Dict[str, Any]:
        with constraint_guard("Allocation"), self._engine.begin() as conn:
            conn.execute(
                text("""
                    INSERT INTO allocations
                        (id, team_member_id, work_item_id, hours_per_week,
                         start_date, end_date, notes, created_at, updated_at)
                    VALUES
                        (:id, :team_member_id, :work_item_id, :hours_per_week,
                         :start_date, :end_date, :notes, :created_at, :updated_at)
                """),
                _encode(record),
            )
        return self.get(record["id"])

    def update(self, allocation_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with constraint_guard("Allocation"), self._engine.begin() as conn:
            update_row(conn, "allocations", allocation_id, _encode(fields), UPDATABLE)
        return self.get(allocation_id)

    def delete(self, allocation_id: str) -> bool:
        with self._engine.begin() as conn:
            return conn.execute(
                text("DELETE FROM allocations WHERE id = :id"), {"id": allocation_id}
            ).rowcount > 0

    # ── Read ───────────────────────────────────────────────────────────

    def get(self, allocation_id: str) -> Optional[Dict[str, Any]]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(f"SELECT {ALLOCATION_COLS} FROM {ALLOCATION_FROM} WHERE a.id = :id"),
                {"id": allocation_id},
            ).fetchone()
        return _row_to_dict(row) if row else None

    def list_allocations(self, team_member_id: Optional[str] = None,
                         work_item_id: Optional[str] = None) -> List[Dict[str, Any]]:
        conditions = []
        params: Dict[str, Any] = {}
        if team_member_id:
            conditions.append("a.team_member_id = :team_member_id")
            params["team_member_id"] = team_member_id
        if work_item_id:
            conditions.append("a.work_item_id = :work_item_id")
            params["work_item_id"] = work_item_id
        where = (" WHERE " + " AND ".join(conditions)) if conditions else ""

        with self._engine.connect() as conn:
            rows = conn.execute(
                text(f"SELECT {ALLOCATION_COLS} FROM {ALLOCATION_FROM}{where} "
                     "ORDER BY a.start_date, a.created_at"),
                params,
            ).fetchall()
        return [_row_to_dict(r) for r in rows]
