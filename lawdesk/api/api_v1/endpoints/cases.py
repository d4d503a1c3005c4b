from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Path, Query, status
import logging

from lawdesk.api.deps import PageParams, get_services
from lawdesk.core.auth import get_current_user
from lawdesk.schemas.base import DeleteResult, Page
from lawdesk.schemas.case import Case, CaseCreate, CaseStatus, CaseType, CaseUpdate
from lawdesk.services import Services

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=Page[Case])
async def list_cases(
    *,
    services: Services = Depends(get_services),
    current_user: Dict[str, Any] = Depends(get_current_user),
    paging: PageParams = Depends(),
    client_id: Optional[str] = Query(None, alias="clientId", description="Filter by client ID"),
    case_status: Optional[CaseStatus] = Query(None, alias="status", description="Filter by case status"),
    case_type: Optional[CaseType] = Query(None, alias="type"),
    assigned_to: Optional[str] = Query(None, alias="assignedTo", description="Cases assigned to this user"),
    search: Optional[str] = Query(None, description="Match title or case number"),
) -> Any:
    """
    Retrieve cases with optional filtering.
    """
    filters = {
        "clientId": client_id,
        "status": case_status.value if case_status else None,
        "type": case_type.value if case_type else None,
        "assignedTo": assigned_to,
        "search": search,
    }
    page = await services.cases.list(filters, paging.page, paging.limit)
    logger.info(f"Retrieved {len(page.items)} of {page.total} cases")
    return page.to_dict()


@router.post("", response_model=Case, status_code=status.HTTP_201_CREATED)
async def create_case(
    *,
    services: Services = Depends(get_services),
    case_in: CaseCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    """
    Create new case.
    """
    logger.info(f"Case creation requested by user: {current_user['id']}")
    new_case = await services.cases.create(case_in, actor_id=current_user["id"])
    logger.info(f"Case created successfully: {new_case['id']}")
    return new_case


@router.get("/{case_id}", response_model=Case)
async def read_case(
    *,
    services: Services = Depends(get_services),
    case_id: str = Path(..., description="The ID of the case to retrieve"),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.cases.get(case_id)


@router.put("/{case_id}", response_model=Case)
async def update_case(
    *,
    services: Services = Depends(get_services),
    case_id: str = Path(..., description="The ID of the case to update"),
    case_in: CaseUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    logger.info(f"Case update requested for {case_id} by user: {current_user['id']}")
    return await services.cases.update(case_id, case_in)


@router.delete("/{case_id}", response_model=DeleteResult)
async def delete_case(
    *,
    services: Services = Depends(get_services),
    case_id: str = Path(..., description="The ID of the case to delete"),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    """
    Delete case.

    Rejected while tasks, court logs, time entries, messages or payments
    still refer to it.
    """
    await services.cases.delete(case_id)
    logger.info(f"Case {case_id} deleted by user: {current_user['id']}")
    return {"success": True}
