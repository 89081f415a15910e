# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Team roster — member CRUD plus capacity-enriched reads.

Capacity figures are recomputed from the allocation rows on every read
and never written back.
"""

import uuid
from datetime import date, datetime, timezone
from typing import Any, Optional

from app.core.config import settings
from app.core.errors import ConstraintError, NotFoundError
from app.core.logging import get_logger
from app.metrics import TEAM_MEMBERS_DEACTIVATED
from app.repositories.allocation_repository import AllocationRepository
from app.repositories.team_member_repository import TeamMemberRepository
from app.repositories.team_repository import TeamRepository
from app.services import capacity

logger = get_logger(__name__)


class TeamMemberService:
    """Business logic for team members."""

    def __init__(
        self,
        member_repo: TeamMemberRepository,
        team_repo: TeamRepository,
        allocation_repo: AllocationRepository,
    ) -> None:
        self._members = member_repo
        self._teams = team_repo
        self._allocations = allocation_repo

    # ── Commands ──

    def create_member(self, payload: dict[str, Any]) -> dict[str, Any]:
        self._check_team(payload.get("team_id"))
        now = datetime.now(timezone.utc).isoformat()
        record = {
            "id": str(uuid.uuid4()),
            "name": payload["name"],
            "role": payload["role"],
            "email": payload["email"],
            "team_id": payload.get("team_id"),
            "skills": payload.get("skills") or [],
            "weekly_hours": payload.get("weekly_hours") or settings.DEFAULT_WEEKLY_HOURS,
            "avatar": payload.get("avatar"),
            "is_active": payload.get("is_active", True),
            "created_at": now,
            "updated_at": now,
        }
        member = self._members.create(record)
        logger.info("Team member created id=%s email=%s team=%s",
                    member["id"], member["email"], member["team_id"])
        return self._with_stats(member)

    def update_member(self, member_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        if not self._members.exists(member_id):
            raise NotFoundError("Team member", member_id)
        if "team_id" in updates:
            self._check_team(updates["team_id"])
        if updates:
            fields = dict(updates)
            fields["updated_at"] = datetime.now(timezone.utc).isoformat()
            self._members.update(member_id, fields)
            logger.info("Team member updated id=%s fields=%s", member_id, sorted(updates))
        return self.get_member(member_id)

    def deactivate_member(self, member_id: str) -> dict[str, Any]:
        """Soft delete; idempotent. Allocations are left untouched."""
        current = self._members.get(member_id)
        if current is None:
            raise NotFoundError("Team member", member_id)
        if current["is_active"]:
            self._members.deactivate(member_id, datetime.now(timezone.utc).isoformat())
            TEAM_MEMBERS_DEACTIVATED.inc()
            logger.info("Team member deactivated id=%s", member_id)
        return {"status": "deactivated", "id": member_id, "is_active": False}

    # ── Queries ──

    def get_member(self, member_id: str, today: Optional[date] = None) -> dict[str, Any]:
        member = self._members.get(member_id)
        if member is None:
            raise NotFoundError("Team member", member_id)
        return self._with_stats(member, today)

    def list_members(self, team_id: Optional[str] = None, include_inactive: bool = False,
                     today: Optional[date] = None) -> list[dict[str, Any]]:
        members = self._members.list_members(team_id=team_id, include_inactive=include_inactive)
        allocations = self._allocations.list_allocations()
        return [
            {**m, **capacity.member_stats(m, allocations, today)}
            for m in members
        ]

    # ── Private ──

    def _with_stats(self, member: dict[str, Any], today: Optional[date] = None) -> dict[str, Any]:
        allocations = self._allocations.list_allocations(team_member_id=member["id"])
        return {**member, **capacity.member_stats(member, allocations, today)}

    def _check_team(self, team_id: Optional[str]) -> None:
        if team_id and not self._teams.exists(team_id):
            raise ConstraintError(f"Team {team_id} does not exist")
