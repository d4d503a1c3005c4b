from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Path, Query, status
import logging

from lawdesk.api.deps import PageParams, get_services
from lawdesk.core.auth import get_current_user
from lawdesk.schemas.base import DeleteResult, Page
from lawdesk.schemas.time_entry import TimeEntry, TimeEntryCreate, TimeEntryUpdate
from lawdesk.services import Services

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=Page[TimeEntry])
async def list_time_entries(
    *,
    services: Services = Depends(get_services),
    current_user: Dict[str, Any] = Depends(get_current_user),
    paging: PageParams = Depends(),
    case_id: Optional[str] = Query(None, alias="caseId"),
    client_id: Optional[str] = Query(None, alias="clientId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    invoice_id: Optional[str] = Query(None, alias="invoiceId"),
    billable: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, description="Match description"),
) -> Any:
    filters = {
        "caseId": case_id,
        "clientId": client_id,
        "userId": user_id,
        "invoiceId": invoice_id,
        "billable": billable,
        "search": search,
    }
    page = await services.time_entries.list(filters, paging.page, paging.limit)
    return page.to_dict()


@router.post("", response_model=TimeEntry, status_code=status.HTTP_201_CREATED)
async def create_time_entry(
    *,
    services: Services = Depends(get_services),
    entry_in: TimeEntryCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    """
    Record billable time. ``userId`` defaults to the current user.
    """
    return await services.time_entries.create(entry_in, actor_id=current_user["id"])


@router.get("/{entry_id}", response_model=TimeEntry)
async def read_time_entry(
    *,
    services: Services = Depends(get_services),
    entry_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.time_entries.get(entry_id)


@router.put("/{entry_id}", response_model=TimeEntry)
async def update_time_entry(
    *,
    services: Services = Depends(get_services),
    entry_id: str = Path(...),
    entry_in: TimeEntryUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.time_entries.update(entry_id, entry_in)


@router.delete("/{entry_id}", response_model=DeleteResult)
async def delete_time_entry(
    *,
    services: Services = Depends(get_services),
    entry_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    """
    Delete a time entry. Rejected while the entry is on an invoice.
    """
    await services.time_entries.delete(entry_id)
    return {"success": True}
