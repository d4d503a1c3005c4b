from typing import Any, Dict, Optional
from datetime import date
from fastapi import APIRouter, Depends, Path, Query, status
import logging

from lawdesk.api.deps import PageParams, get_services
from lawdesk.core.auth import get_current_user
from lawdesk.schemas.base import DeleteResult, Page
from lawdesk.schemas.court_log import CourtLog, CourtLogCreate, CourtLogStatus, CourtLogUpdate
from lawdesk.services import Services

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=Page[CourtLog])
async def list_court_logs(
    *,
    services: Services = Depends(get_services),
    current_user: Dict[str, Any] = Depends(get_current_user),
    paging: PageParams = Depends(),
    client_id: Optional[str] = Query(None, alias="clientId"),
    case_id: Optional[str] = Query(None, alias="caseId"),
    log_status: Optional[CourtLogStatus] = Query(None, alias="status"),
    court_date: Optional[date] = Query(None, alias="courtDate", description="Hearings on this day"),
    search: Optional[str] = Query(None, description="Match court, client name or purpose"),
) -> Any:
    """
    Retrieve court hearings.
    """
    filters = {
        "clientId": client_id,
        "caseId": case_id,
        "status": log_status.value if log_status else None,
        "courtDate": court_date.isoformat() if court_date else None,
        "search": search,
    }
    page = await services.court_logs.list(filters, paging.page, paging.limit)
    return page.to_dict()


@router.post("", response_model=CourtLog, status_code=status.HTTP_201_CREATED)
async def create_court_log(
    *,
    services: Services = Depends(get_services),
    log_in: CourtLogCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    """
    Log a court hearing. The client name and case number are copied from the
    referenced records.
    """
    logger.info(f"Court log creation requested by user: {current_user['id']}")
    return await services.court_logs.create(log_in, actor_id=current_user["id"])


@router.get("/{log_id}", response_model=CourtLog)
async def read_court_log(
    *,
    services: Services = Depends(get_services),
    log_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.court_logs.get(log_id)


@router.put("/{log_id}", response_model=CourtLog)
async def update_court_log(
    *,
    services: Services = Depends(get_services),
    log_id: str = Path(...),
    log_in: CourtLogUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.court_logs.update(log_id, log_in)


@router.delete("/{log_id}", response_model=DeleteResult)
async def delete_court_log(
    *,
    services: Services = Depends(get_services),
    log_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    await services.court_logs.delete(log_id)
    return {"success": True}
