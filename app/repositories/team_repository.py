# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Team data access — pure CRUD, no business rules.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.repositories.helpers import constraint_guard, iso_timestamp, update_row

TEAM_COLS = "t.id, t.name, t.description, t.created_at, t.updated_at"

UPDATABLE = ("name", "description", "updated_at")


def _row_to_dict(row) -> Dict[str, Any]:
    return {
        "id": str(row[0]),
        "name": row[1],
        "description": row[2] or "",
        "created_at": iso_timestamp(row[3]),
        "updated_at": iso_timestamp(row[4]),
    }


class TeamRepository:
    """Handles all direct database operations for teams."""

    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Write ──────────────────────────────────────────────────────────

    def create(self, record: Dict[str, Any]) -> Dict[str, Any]:
        with constraint_guard("Team"), self._engine.begin() as conn:
            conn.execute(
                text("""
                    INSERT INTO teams (id, name, description, created_at, updated_at)
                    VALUES (:id, :name, :description, :created_at, :updated_at)
                """),
                record,
            )
        return self.get(record["id"])

    def update(self, team_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with constraint_guard("Team"), self._engine.begin() as conn:
            update_row(conn, "teams", team_id, fields, UPDATABLE)
        return self.get(team_id)

    def delete(self, team_id: str) -> Optional[int]:
        """Detach members, then delete. Returns members detached, None if absent."""
        with self._engine.begin() as conn:
            exists = conn.execute(
                text("SELECT 1 FROM teams WHERE id = :id"), {"id": team_id}
            ).fetchone()
            if not exists:
                return None
            detached = conn.execute(
                text("UPDATE team_members SET team_id = NULL WHERE team_id = :id"),
                {"id": team_id},
            ).rowcount
            conn.execute(text("DELETE FROM teams WHERE id = :id"), {"id": team_id})
        return detached

    # ── Read ───────────────────────────────────────────────────────────

    def get(self, team_id: str) -> Optional[Dict[str, Any]]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(f"""
                    SELECT {TEAM_COLS},
                           (SELECT COUNT(*) FROM team_members m
                            WHERE m.team_id = t.id AND m.is_active = :active) AS member_count
                    FROM teams t WHERE t.id = :id
                """),
                {"id": team_id, "active": True},
            ).fetchone()
        if not row:
            return None
        team = _row_to_dict(row)
        team["member_count"] = row[5] or 0
        return team

    def list_all(self) -> List[Dict[str, Any]]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                text(f"""
                    SELECT {TEAM_COLS},
                           (SELECT COUNT(*) FROM team_members m
                            WHERE m.team_id = t.id AND m.is_active = :active) AS member_count
                    FROM teams t ORDER BY t.name
                """),
                {"active": True},
            ).fetchall()
        teams = []
        for row in rows:
            team = _row_to_dict(row)
            team["member_count"] = row[5] or 0
            teams.append(team)
        return teams

    def exists(self, team_id: str) -> bool:
        with self._engine.connect() as conn:
            return conn.execute(
                text("SELECT 1 FROM teams WHERE id = :id"), {"id": team_id}
            ).fetchone() is not None
