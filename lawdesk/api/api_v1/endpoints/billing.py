from typing import Any, Dict
from fastapi import APIRouter, Depends

from lawdesk.api.deps import get_services
from lawdesk.core.auth import get_current_user
from lawdesk.schemas.payment import BillingSummary
from lawdesk.services import Services

router = APIRouter()


@router.get("/summary", response_model=BillingSummary)
async def billing_summary(
    services: Services = Depends(get_services),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    """
    Ledger, invoice and expense totals with net profit and a per-client breakdown.
    """
    return await services.billing.summary()
