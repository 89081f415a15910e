# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Team CRUD endpoints.
Thin HTTP layer — delegates ALL logic to TeamService.
"""

from fastapi import APIRouter, Depends

from app.controllers.ids import require_uuid
from app.core.dependencies import get_team_service
from app.schemas import TeamCreate, TeamOut, TeamUpdate
from app.services.team_service import TeamService

router = APIRouter(prefix="/api/v1", tags=["Teams"])


@router.post("/teams", status_code=201, response_model=TeamOut)
def create_team(payload: TeamCreate, service: TeamService = Depends(get_team_service)):
    return service.create_team(payload.name, payload.description)


@router.get("/teams", response_model=list[TeamOut])
def list_teams(service: TeamService = Depends(get_team_service)):
    return service.list_teams()


@router.get("/teams/{team_id}", response_model=TeamOut)
def get_team(team_id: str, service: TeamService = Depends(get_team_service)):
    return service.get_team(require_uuid(team_id, "team"))


@router.patch("/teams/{team_id}", response_model=TeamOut)
def update_team(team_id: str, payload: TeamUpdate,
                service: TeamService = Depends(get_team_service)):
    return service.update_team(require_uuid(team_id, "team"),
                               payload.model_dump(exclude_unset=True))


@router.delete("/teams/{team_id}")
def delete_team(team_id: str, service: TeamService = Depends(get_team_service)):
    """Delete a team; its members stay, with team_id cleared."""
    return service.delete_team(require_uuid(team_id, "team"))
