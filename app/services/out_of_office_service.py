# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Out-of-office entries.

Stored and listed only; capacity figures do not subtract them yet.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from app.core.errors import ConstraintError, NotFoundError
from app.core.logging import get_logger
from app.repositories.out_of_office_repository import OutOfOfficeRepository
from app.repositories.team_member_repository import TeamMemberRepository
from app.services.work_item_validator import validate_date_range

logger = get_logger(__name__)


class OutOfOfficeService:
    def __init__(
        self,
        ooo_repo: OutOfOfficeRepository,
        member_repo: TeamMemberRepository,
    ) -> None:
        self._entries = ooo_repo
        self._members = member_repo

    def create_entry(self, payload: dict[str, Any]) -> dict[str, Any]:
        validate_date_range(payload["start_date"], payload["end_date"])
        if not self._members.exists(payload["team_member_id"]):
            raise ConstraintError(f"Team member {payload['team_member_id']} does not exist")
        entry = self._entries.create({
            "id": str(uuid.uuid4()),
            "team_member_id": payload["team_member_id"],
            "start_date": payload["start_date"],
            "end_date": payload["end_date"],
            "reason": payload.get("reason") or "Out of office",
            "created_at": datetime.now(timezone.utc).isoformat(),
        })
        logger.info("Out-of-office recorded id=%s member=%s %s..%s", entry["id"],
                    entry["team_member_id"], entry["start_date"], entry["end_date"])
        return entry

    def list_entries(self, team_member_id: Optional[str] = None) -> list[dict[str, Any]]:
        return self._entries.list_entries(team_member_id)

    def delete_entry(self, entry_id: str) -> dict[str, Any]:
        if not self._entries.delete(entry_id):
            raise NotFoundError("Out-of-office entry", entry_id)
        logger.info("Out-of-office deleted id=%s", entry_id)
        return {"status": "deleted", "id": entry_id}
