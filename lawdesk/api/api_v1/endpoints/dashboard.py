from typing import Any, Dict
from fastapi import APIRouter, Depends

from lawdesk.api.deps import get_services
from lawdesk.core.auth import get_current_user
from lawdesk.schemas.dashboard import DashboardStats
from lawdesk.services import Services

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    services: Services = Depends(get_services),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.dashboard.stats()
