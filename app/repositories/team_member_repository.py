# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Team member data access — pure CRUD, no business rules.
"""

import json
from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.repositories.helpers import constraint_guard, iso_timestamp, update_row

MEMBER_COLS = (
    "m.id, m.name, m.role, m.email, m.team_id, m.skills, m.weekly_hours, "
    "m.avatar, m.is_active, m.created_at, m.updated_at, t.name"
)

UPDATABLE = (
    "name", "role", "email", "team_id", "skills", "weekly_hours",
    "avatar", "is_active", "updated_at",
)


def _row_to_dict(row) -> Dict[str, Any]:
    skills = row[5]
    return {
        "id": str(row[0]),
        "name": row[1],
        "role": row[2],
        "email": row[3],
        "team_id": str(row[4]) if row[4] else None,
        "skills": skills if isinstance(skills, list) else json.loads(skills or "[]"),
        "weekly_hours": row[6],
        "avatar": row[7],
        "is_active": bool(row[8]),
        "created_at": iso_timestamp(row[9]),
        "updated_at": iso_timestamp(row[10]),
        "team_name": row[11],
    }


def _encode(record: Dict[str, Any]) -> Dict[str, Any]:
    params = dict(record)
    if "skills" in params:
        params["skills"] = json.dumps(params["skills"] or [])
    return params


class TeamMemberRepository:
    """Handles all direct database operations for team members."""

    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Write ──────────────────────────────────────────────────────────

    def create(self, record: Dict[str, Any]) -> Dict[str, Any]:
        with constraint_guard("Team member", unique_field="email"), self._engine.begin() as conn:
            conn.execute(
                text("""
                    INSERT INTO team_members
                        (id, name, role, email, team_id, skills, weekly_hours,
                         avatar, is_active, created_at, updated_at)
                    VALUES
                        (:id, :name, :role, :email, :team_id, :skills, :weekly_hours,
                         :avatar, :is_active, :created_at, :updated_at)
                """),
                _encode(record),
            )
        return self.get(record["id"])

    def update(self, member_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with constraint_guard("Team member", unique_field="email"), self._engine.begin() as conn:
            update_row(conn, "team_members", member_id, _encode(fields), UPDATABLE)
        return self.get(member_id)

    def deactivate(self, member_id: str, updated_at: str) -> Optional[Dict[str, Any]]:
        """Soft delete. Re-running on an inactive member is a no-op."""
        with self._engine.begin() as conn:
            conn.execute(
                text("""
                    UPDATE team_members SET is_active = :inactive, updated_at = :ts
                    WHERE id = :id AND is_active = :active
                """),
                {"id": member_id, "inactive": False, "active": True, "ts": updated_at},
            )
        return self.get(member_id)

    # ── Read ───────────────────────────────────────────────────────────

    def get(self, member_id: str) -> Optional[Dict[str, Any]]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(f"""
                    SELECT {MEMBER_COLS}
                    FROM team_members m LEFT JOIN teams t ON t.id = m.team_id
                    WHERE m.id = :id
                """),
                {"id": member_id},
            ).fetchone()
        return _row_to_dict(row) if row else None

    def list_members(self, team_id: Optional[str] = None,
                     include_inactive: bool = False) -> List[Dict[str, Any]]:
        conditions = []
        params: Dict[str, Any] = {}
        if team_id:
            conditions.append("m.team_id = :team_id")
            params["team_id"] = team_id
        if not include_inactive:
            conditions.append("m.is_active = :active")
            params["active"] = True
        where = (" WHERE " + " AND ".join(conditions)) if conditions else ""

        with self._engine.connect() as conn:
            rows = conn.execute(
                text(f"""
                    SELECT {MEMBER_COLS}
                    FROM team_members m LEFT JOIN teams t ON t.id = m.team_id
                    {where}
                    ORDER BY m.name
                """),
                params,
            ).fetchall()
        return [_row_to_dict(r) for r in rows]

    def exists(self, member_id: str) -> bool:
        with self._engine.connect() as conn:
            return conn.execute(
                text("SELECT 1 FROM team_members WHERE id = :id"), {"id": member_id}
            ).fetchone() is not None

    def verify_connection(self):
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))
