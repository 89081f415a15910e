# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Team management — business logic for team CRUD.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from app.core.errors import NotFoundError
from app.core.logging import get_logger
from app.repositories.team_repository import TeamRepository

logger = get_logger(__name__)


class TeamService:
    """Business logic for teams. Deleting a team never deletes its members."""

    def __init__(self, team_repo: TeamRepository) -> None:
        self._teams = team_repo

    # ── Commands ──

    def create_team(self, name: str, description: str = "") -> dict[str, Any]:
        now = datetime.now(timezone.utc).isoformat()
        team = self._teams.create({
            "id": str(uuid.uuid4()),
            "name": name,
            "description": description,
            "created_at": now,
            "updated_at": now,
        })
        logger.info("Team created id=%s name=%s", team["id"], team["name"])
        return team

    def update_team(self, team_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        if not self._teams.exists(team_id):
            raise NotFoundError("Team", team_id)
        if not updates:
            return self._teams.get(team_id)
        fields = dict(updates)
        fields["updated_at"] = datetime.now(timezone.utc).isoformat()
        team = self._teams.update(team_id, fields)
        logger.info("Team updated id=%s fields=%s", team_id, sorted(updates))
        return team

    def delete_team(self, team_id: str) -> dict[str, Any]:
        detached = self._teams.delete(team_id)
        if detached is None:
            raise NotFoundError("Team", team_id)
        logger.info("Team deleted id=%s members_detached=%d", team_id, detached)
        return {"status": "deleted", "id": team_id, "members_detached": detached}

    # ── Queries ──

    def list_teams(self) -> list[dict[str, Any]]:
        return self._teams.list_all()

    def get_team(self, team_id: str) -> dict[str, Any]:
        team = self._teams.get(team_id)
        if team is None:
            raise NotFoundError("Team", team_id)
        return team
