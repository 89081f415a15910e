# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Work items and the status taxonomy they are validated against.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.controllers.ids import require_uuid
from app.core.dependencies import get_work_item_service
from app.schemas import WorkItemCreate, WorkItemUpdate, WorkItemWithAllocations
from app.services.status_taxonomy import status_catalog
from app.services.work_item_service import WorkItemService

router = APIRouter(prefix="/api/v1", tags=["Work Items"])


@router.get("/work-items/statuses")
def list_work_item_statuses():
    """Valid statuses per type, first one being the default."""
    return status_catalog()


@router.post("/work-items", status_code=201, response_model=WorkItemWithAllocations)
def create_work_item(payload: WorkItemCreate,
                     service: WorkItemService = Depends(get_work_item_service)):
    return service.create_work_item(payload.model_dump())


@router.get("/work-items", response_model=list[WorkItemWithAllocations])
def list_work_items(
    type_filter: Optional[str] = Query(default=None, alias="type"),
    status: Optional[str] = None,
    priority: Optional[str] = None,
    service: WorkItemService = Depends(get_work_item_service),
):
    return service.list_work_items(type_filter, status, priority)


@router.get("/work-items/{item_id}", response_model=WorkItemWithAllocations)
def get_work_item(item_id: str, service: WorkItemService = Depends(get_work_item_service)):
    return service.get_work_item(require_uuid(item_id, "work item"))


@router.patch("/work-items/{item_id}", response_model=WorkItemWithAllocations)
def update_work_item(item_id: str, payload: WorkItemUpdate,
                     service: WorkItemService = Depends(get_work_item_service)):
    return service.update_work_item(require_uuid(item_id, "work item"),
                                    payload.model_dump(exclude_unset=True))


@router.delete("/work-items/{item_id}")
def delete_work_item(item_id: str, service: WorkItemService = Depends(get_work_item_service)):
    """Hard delete; the item's allocations go with it."""
    return service.delete_work_item(require_uuid(item_id, "work item"))
