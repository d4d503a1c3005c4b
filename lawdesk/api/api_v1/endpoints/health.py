from datetime import datetime, timezone
from fastapi import APIRouter, Depends

from lawdesk.api.deps import get_services
from lawdesk.services import Services
from lawdesk.utils.logging import log_error


router = APIRouter()


@router.get("")
async def health_check(services: Services = Depends(get_services)):
    try:
        clients = await services.stores.clients.count()
        store_status = "connected"
    except Exception as e:
        log_error(e, "Health check failed")
        clients = None
        store_status = f"error: {str(e)}"

    return {
        "status": "ok" if clients is not None else "degraded",
        "message": "API is running",
        "backend": services.stores.backend,
        "store": store_status,
        "clients": clients,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
