# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Allocation CRUD endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from app.controllers.ids import require_uuid
from app.core.dependencies import get_allocation_service
from app.schemas import AllocationCreate, AllocationOut, AllocationUpdate
from app.services.allocation_service import AllocationService

router = APIRouter(prefix="/api/v1", tags=["Allocations"])


@router.post("/allocations", status_code=201, response_model=AllocationOut)
def create_allocation(payload: AllocationCreate,
                      service: AllocationService = Depends(get_allocation_service)):
    return service.create_allocation(payload.model_dump())


@router.get("/allocations", response_model=list[AllocationOut])
def list_allocations(
    team_member_id: Optional[str] = None,
    work_item_id: Optional[str] = None,
    service: AllocationService = Depends(get_allocation_service),
):
    return service.list_allocations(team_member_id, work_item_id)


@router.get("/allocations/{allocation_id}", response_model=AllocationOut)
def get_allocation(allocation_id: str,
                   service: AllocationService = Depends(get_allocation_service)):
    return service.get_allocation(require_uuid(allocation_id, "allocation"))


@router.patch("/allocations/{allocation_id}", response_model=AllocationOut)
def update_allocation(allocation_id: str, payload: AllocationUpdate,
                      service: AllocationService = Depends(get_allocation_service)):
    return service.update_allocation(require_uuid(allocation_id, "allocation"),
                                     payload.model_dump(exclude_unset=True))


@router.delete("/allocations/{allocation_id}")
def delete_allocation(allocation_id: str,
                      service: AllocationService = Depends(get_allocation_service)):
    return service.delete_allocation(require_uuid(allocation_id, "allocation"))
