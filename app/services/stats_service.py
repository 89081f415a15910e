# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Roster-wide capacity statistics for the dashboard header.
"""

from datetime import date
from typing import Any, Optional

from app.repositories.allocation_repository import AllocationRepository
from app.repositories.team_member_repository import TeamMemberRepository
from app.repositories.work_item_repository import WorkItemRepository
from app.services import capacity


class StatsService:
    def __init__(
        self,
        member_repo: TeamMemberRepository,
        work_item_repo: WorkItemRepository,
        allocation_repo: AllocationRepository,
    ) -> None:
        self._members = member_repo
        self._items = work_item_repo
        self._allocations = allocation_repo

    def get_team_stats(self, today: Optional[date] = None) -> dict[str, Any]:
        return capacity.team_stats(
            self._members.list_members(),
            self._items.list_items(),
            self._allocations.list_allocations(),
            today,
        )
