# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Out-of-office data access — pure CRUD, no business rules.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.repositories.helpers import as_date, bind_date, constraint_guard, iso_timestamp

OOO_COLS = "id, team_member_id, start_date, end_date, reason, created_at"


def _row_to_dict(row) -> Dict[str, Any]:
    return {
        "id": str(row[0]),
        "team_member_id": str(row[1]),
        "start_date": as_date(row[2]),
        "end_date": as_date(row[3]),
        "reason": row[4],
        "created_at": iso_timestamp(row[5]),
    }


class OutOfOfficeRepository:
    """Handles all direct database operations for out-of-office entries."""

    def __init__(self, engine: Engine):
        self._engine = engine

    def create(self, record: Dict[str, Any]) -> Dict[str, Any]:
        params = dict(record)
        params["start_date"] = bind_date(record["start_date"])
        params["end_date"] = bind_date(record["end_date"])
        with constraint_guard("Out-of-office entry"), self._engine.begin() as conn:
            conn.execute(
                text("""
                    INSERT INTO out_of_office
                        (id, team_member_id, start_date, end_date, reason, created_at)
                    VALUES
                        (:id, :team_member_id, :start_date, :end_date, :reason, :created_at)
                """),
                params,
            )
        return self.get(record["id"])

    def delete(self, entry_id: str) -> bool:
        with self._engine.begin() as conn:
            return conn.execute(
                text("DELETE FROM out_of_office WHERE id = :id"), {"id": entry_id}
            ).rowcount > 0

    def get(self, entry_id: str) -> Optional[Dict[str, Any]]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(f"SELECT {OOO_COLS} FROM out_of_office WHERE id = :id"),
                {"id": entry_id},
            ).fetchone()
        return _row_to_dict(row) if row else None

    def list_entries(self, team_member_id: Optional[str] = None) -> List[Dict[str, Any]]:
        where = " WHERE team_member_id = :team_member_id" if team_member_id else ""
        params = {"team_member_id": team_member_id} if team_member_id else {}
        with self._engine.connect() as conn:
            rows = conn.execute(
                text(f"SELECT {OOO_COLS} FROM out_of_office{where} ORDER BY start_date DESC"),
                params,
            ).fetchall()
        return [_row_to_dict(r) for r in rows]
