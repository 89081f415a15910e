# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.
"""

from app.core.database import engine
from app.repositories import (
    AllocationRepository,
    OutOfOfficeRepository,
    TeamMemberRepository,
    TeamRepository,
    WorkItemRepository,
)
from app.services.allocation_service import AllocationService
from app.services.out_of_office_service import OutOfOfficeService
from app.services.stats_service import StatsService
from app.services.team_member_service import TeamMemberService
from app.services.team_service import TeamService
from app.services.work_item_service import WorkItemService

# ── Singleton repository instances (shared engine) ──
_team_repo = TeamRepository(engine)
_member_repo = TeamMemberRepository(engine)
_work_item_repo = WorkItemRepository(engine)
_allocation_repo = AllocationRepository(engine)
_ooo_repo = OutOfOfficeRepository(engine)

# ── Service instances (with injected dependencies) ──
_team_service = TeamService(team_repo=_team_repo)
_member_service = TeamMemberService(
    member_repo=_member_repo,
    team_repo=_team_repo,
    allocation_repo=_allocation_repo,
)
_work_item_service = WorkItemService(
    work_item_repo=_work_item_repo,
    allocation_repo=_allocation_repo,
)
_allocation_service = AllocationService(
    allocation_repo=_allocation_repo,
    member_repo=_member_repo,
    work_item_repo=_work_item_repo,
)
_ooo_service = OutOfOfficeService(ooo_repo=_ooo_repo, member_repo=_member_repo)
_stats_service = StatsService(
    member_repo=_member_repo,
    work_item_repo=_work_item_repo,
    allocation_repo=_allocation_repo,
)


# ── FastAPI dependency functions ──
def get_team_service() -> TeamService:
    return _team_service


def get_team_member_service() -> TeamMemberService:
    return _member_service


def get_work_item_service() -> WorkItemService:
    return _work_item_service


def get_allocation_service() -> AllocationService:
    return _allocation_service


def get_out_of_office_service() -> OutOfOfficeService:
    return _ooo_service


def get_stats_service() -> StatsService:
    return _stats_service


def get_member_repo() -> TeamMemberRepository:
    return _member_repo
