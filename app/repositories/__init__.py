# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package — re-exports every table repository."""
from app.repositories.allocation_repository import AllocationRepository
from app.repositories.out_of_office_repository import OutOfOfficeRepository
from app.repositories.team_member_repository import TeamMemberRepository
from app.repositories.team_repository import TeamRepository
from app.repositories.work_item_repository import WorkItemRepository

__all__ = [
    "AllocationRepository",
    "OutOfOfficeRepository",
    "TeamMemberRepository",
    "TeamRepository",
    "WorkItemRepository",
]
