from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Path, Query, status
import logging

from lawdesk.api.deps import PageParams, get_services
from lawdesk.core.auth import get_current_user
from lawdesk.schemas.base import DeleteResult, Page
from lawdesk.schemas.client import Client, ClientCreate, ClientType, ClientUpdate
from lawdesk.services import Services

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=Page[Client])
async def list_clients(
    *,
    services: Services = Depends(get_services),
    current_user: Dict[str, Any] = Depends(get_current_user),
    paging: PageParams = Depends(),
    client_type: Optional[ClientType] = Query(None, alias="type"),
    email: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Match name, company, email or phone"),
) -> Any:
    """
    Retrieve clients, oldest first.
    """
    filters = {
        "type": client_type.value if client_type else None,
        "email": email,
        "search": search,
    }
    page = await services.clients.list(filters, paging.page, paging.limit)
    logger.info(f"Retrieved {len(page.items)} of {page.total} clients")
    return page.to_dict()


@router.post("", response_model=Client, status_code=status.HTTP_201_CREATED)
async def create_client(
    *,
    services: Services = Depends(get_services),
    client_in: ClientCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    logger.info(f"Client creation requested by user: {current_user['id']}")
    return await services.clients.create(client_in, actor_id=current_user["id"])


@router.get("/{client_id}", response_model=Client)
async def read_client(
    *,
    services: Services = Depends(get_services),
    client_id: str = Path(..., description="The ID of the client to retrieve"),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.clients.get(client_id)


@router.put("/{client_id}", response_model=Client)
async def update_client(
    *,
    services: Services = Depends(get_services),
    client_id: str = Path(..., description="The ID of the client to update"),
    client_in: ClientUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.clients.update(client_id, client_in)


@router.delete("/{client_id}", response_model=DeleteResult)
async def delete_client(
    *,
    services: Services = Depends(get_services),
    client_id: str = Path(..., description="The ID of the client to delete"),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    """
    Delete a client.

    Rejected while any case, court log, time entry, invoice or payment still
    refers to the client.
    """
    await services.clients.delete(client_id)
    logger.info(f"Client {client_id} deleted by user: {current_user['id']}")
    return {"success": True}
