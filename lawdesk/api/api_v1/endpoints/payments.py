from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Path, Query, status
import logging

from lawdesk.api.deps import PageParams, get_services
from lawdesk.core.auth import get_current_user
from lawdesk.schemas.base import DeleteResult, Page
from lawdesk.schemas.payment import InstallmentCreate, Payment, PaymentCreate, PaymentStatus, PaymentUpdate
from lawdesk.services import Services

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=Page[Payment])
async def list_payments(
    *,
    services: Services = Depends(get_services),
    current_user: Dict[str, Any] = Depends(get_current_user),
    paging: PageParams = Depends(),
    client_id: Optional[str] = Query(None, alias="clientId"),
    case_id: Optional[str] = Query(None, alias="caseId"),
    payment_status: Optional[PaymentStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, description="Match description or client name"),
) -> Any:
    filters = {
        "clientId": client_id,
        "caseId": case_id,
        "status": payment_status.value if payment_status else None,
        "search": search,
    }
    page = await services.payments.list(filters, paging.page, paging.limit)
    return page.to_dict()


@router.post("", response_model=Payment, status_code=status.HTTP_201_CREATED)
async def create_payment(
    *,
    services: Services = Depends(get_services),
    payment_in: PaymentCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    """
    Open a ledger entry for an amount owed by a client.
    """
    return await services.payments.create(payment_in, actor_id=current_user["id"])


@router.get("/{payment_id}", response_model=Payment)
async def read_payment(
    *,
    services: Services = Depends(get_services),
    payment_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.payments.get(payment_id)


@router.put("/{payment_id}", response_model=Payment)
async def update_payment(
    *,
    services: Services = Depends(get_services),
    payment_id: str = Path(...),
    payment_in: PaymentUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.payments.update(payment_id, payment_in)


@router.post("/{payment_id}/installments", response_model=Payment, status_code=status.HTTP_201_CREATED)
async def add_installment(
    *,
    services: Services = Depends(get_services),
    payment_id: str = Path(...),
    installment_in: InstallmentCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    """
    Record a full or partial payment against the ledger entry.
    """
    logger.info(f"Installment on payment {payment_id} recorded by user: {current_user['id']}")
    return await services.payments.add_installment(payment_id, installment_in)


@router.delete("/{payment_id}", response_model=DeleteResult)
async def delete_payment(
    *,
    services: Services = Depends(get_services),
    payment_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    await services.payments.delete(payment_id)
    return {"success": True}
