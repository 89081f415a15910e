# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Team member endpoints, capacity stats included on every read.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from app.controllers.ids import require_uuid
from app.core.dependencies import get_team_member_service
from app.schemas import TeamMemberCreate, TeamMemberUpdate, TeamMemberWithStats
from app.services.team_member_service import TeamMemberService

router = APIRouter(prefix="/api/v1", tags=["Team Members"])


@router.post("/team-members", status_code=201, response_model=TeamMemberWithStats)
def create_team_member(payload: TeamMemberCreate,
                       service: TeamMemberService = Depends(get_team_member_service)):
    return service.create_member(payload.model_dump())


@router.get("/team-members", response_model=list[TeamMemberWithStats])
def list_team_members(
    team_id: Optional[str] = None,
    include_inactive: bool = False,
    service: TeamMemberService = Depends(get_team_member_service),
):
    """Active roster by default; pass include_inactive=true for everyone."""
    return service.list_members(team_id=team_id, include_inactive=include_inactive)


@router.get("/team-members/{member_id}", response_model=TeamMemberWithStats)
def get_team_member(member_id: str,
                    service: TeamMemberService = Depends(get_team_member_service)):
    return service.get_member(require_uuid(member_id, "team member"))


@router.patch("/team-members/{member_id}", response_model=TeamMemberWithStats)
def update_team_member(member_id: str, payload: TeamMemberUpdate,
                       service: TeamMemberService = Depends(get_team_member_service)):
    return service.update_member(require_uuid(member_id, "team member"),
                                 payload.model_dump(exclude_unset=True))


@router.delete("/team-members/{member_id}")
def delete_team_member(member_id: str,
                       service: TeamMemberService = Depends(get_team_member_service)):
    """Soft delete (is_active=false). Safe to repeat."""
    return service.deactivate_member(require_uuid(member_id, "team member"))
