from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Path, Query, status

from lawdesk.api.deps import PageParams, get_services
from lawdesk.core.auth import get_current_user
from lawdesk.schemas.base import DeleteResult, Page
from lawdesk.schemas.other_payment import (
    OtherPayment,
    OtherPaymentCreate,
    OtherPaymentType,
    OtherPaymentUpdate,
)
from lawdesk.services import Services

router = APIRouter()


@router.get("", response_model=Page[OtherPayment])
async def list_other_payments(
    *,
    services: Services = Depends(get_services),
    current_user: Dict[str, Any] = Depends(get_current_user),
    paging: PageParams = Depends(),
    payment_type: Optional[OtherPaymentType] = Query(None, alias="type"),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
) -> Any:
    filters = {
        "type": payment_type.value if payment_type else None,
        "category": category,
        "search": search,
    }
    page = await services.other_payments.list(filters, paging.page, paging.limit)
    return page.to_dict()


@router.post("", response_model=OtherPayment, status_code=status.HTTP_201_CREATED)
async def create_other_payment(
    *,
    services: Services = Depends(get_services),
    payment_in: OtherPaymentCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.other_payments.create(payment_in, actor_id=current_user["id"])


@router.get("/{payment_id}", response_model=OtherPayment)
async def read_other_payment(
    *,
    services: Services = Depends(get_services),
    payment_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.other_payments.get(payment_id)


@router.put("/{payment_id}", response_model=OtherPayment)
async def update_other_payment(
    *,
    services: Services = Depends(get_services),
    payment_id: str = Path(...),
    payment_in: OtherPaymentUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.other_payments.update(payment_id, payment_in)


@router.delete("/{payment_id}", response_model=DeleteResult)
async def delete_other_payment(
    *,
    services: Services = Depends(get_services),
    payment_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    await services.other_payments.delete(payment_id)
    return {"success": True}
