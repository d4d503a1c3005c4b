from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Path, Query, status
import logging

from lawdesk.api.deps import PageParams, get_services
from lawdesk.core.auth import get_current_user
from lawdesk.schemas.base import DeleteResult, Page
from lawdesk.schemas.task import Task, TaskCreate, TaskPriority, TaskStatus, TaskUpdate
from lawdesk.services import Services

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=Page[Task])
async def list_tasks(
    *,
    services: Services = Depends(get_services),
    current_user: Dict[str, Any] = Depends(get_current_user),
    paging: PageParams = Depends(),
    assigned_to: Optional[str] = Query(None, alias="assignedTo"),
    case_id: Optional[str] = Query(None, alias="caseId"),
    task_status: Optional[TaskStatus] = Query(None, alias="status"),
    priority: Optional[TaskPriority] = Query(None),
    search: Optional[str] = Query(None, description="Match task title"),
) -> Any:
    filters = {
        "assignedTo": assigned_to,
        "caseId": case_id,
        "status": task_status.value if task_status else None,
        "priority": priority.value if priority else None,
        "search": search,
    }
    page = await services.tasks.list(filters, paging.page, paging.limit)
    return page.to_dict()


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(
    *,
    services: Services = Depends(get_services),
    task_in: TaskCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.tasks.create(task_in, actor_id=current_user["id"])


@router.get("/{task_id}", response_model=Task)
async def read_task(
    *,
    services: Services = Depends(get_services),
    task_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.tasks.get(task_id)


@router.put("/{task_id}", response_model=Task)
async def update_task(
    *,
    services: Services = Depends(get_services),
    task_id: str = Path(...),
    task_in: TaskUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.tasks.update(task_id, task_in)


@router.delete("/{task_id}", response_model=DeleteResult)
async def delete_task(
    *,
    services: Services = Depends(get_services),
    task_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    await services.tasks.delete(task_id)
    return {"success": True}
