# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Out-of-office endpoints and roster stats.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from app.controllers.ids import require_uuid
from app.core.dependencies import get_out_of_office_service, get_stats_service
from app.schemas import OutOfOfficeCreate, OutOfOfficeOut, TeamStats
from app.services.out_of_office_service import OutOfOfficeService
from app.services.stats_service import StatsService

router = APIRouter(prefix="/api/v1", tags=["Availability"])


@router.post("/out-of-office", status_code=201, response_model=OutOfOfficeOut)
def create_out_of_office(payload: OutOfOfficeCreate,
                         service: OutOfOfficeService = Depends(get_out_of_office_service)):
    return service.create_entry(payload.model_dump())


@router.get("/out-of-office", response_model=list[OutOfOfficeOut])
def list_out_of_office(team_member_id: Optional[str] = None,
                       service: OutOfOfficeService = Depends(get_out_of_office_service)):
    return service.list_entries(team_member_id)


@router.delete("/out-of-office/{entry_id}")
def delete_out_of_office(entry_id: str,
                         service: OutOfOfficeService = Depends(get_out_of_office_service)):
    return service.delete_entry(require_uuid(entry_id, "out-of-office"))


@router.get("/stats", response_model=TeamStats)
def get_team_stats(service: StatsService = Depends(get_stats_service)):
    """Roster-wide capacity summary over active members."""
    return service.get_team_stats()
