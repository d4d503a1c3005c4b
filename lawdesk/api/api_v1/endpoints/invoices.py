from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Path, Query, status
import logging

from lawdesk.api.deps import PageParams, get_services
from lawdesk.core.auth import get_current_user
from lawdesk.schemas.base import DeleteResult, Page
from lawdesk.schemas.invoice import Invoice, InvoiceCreate, InvoiceStatus, InvoiceUpdate
from lawdesk.services import Services

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=Page[Invoice])
async def list_invoices(
    *,
    services: Services = Depends(get_services),
    current_user: Dict[str, Any] = Depends(get_current_user),
    paging: PageParams = Depends(),
    client_id: Optional[str] = Query(None, alias="clientId"),
    invoice_status: Optional[InvoiceStatus] = Query(None, alias="status"),
    time_entry_id: Optional[str] = Query(None, alias="timeEntryId", description="Invoices billing this entry"),
    search: Optional[str] = Query(None, description="Match invoice number or notes"),
) -> Any:
    filters = {
        "clientId": client_id,
        "status": invoice_status.value if invoice_status else None,
        "timeEntryId": time_entry_id,
        "search": search,
    }
    page = await services.invoices.list(filters, paging.page, paging.limit)
    return page.to_dict()


@router.post("", response_model=Invoice, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    *,
    services: Services = Depends(get_services),
    invoice_in: InvoiceCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    """
    Issue an invoice.

    Without an explicit subtotal it is the sum of ``duration * hourlyRate``
    over the billable time entries listed; ``total = subtotal + tax``.
    """
    logger.info(f"Invoice creation requested by user: {current_user['id']}")
    invoice = await services.invoices.create(invoice_in, actor_id=current_user["id"])
    logger.info(f"Invoice {invoice['invoiceNumber']} created with total {invoice['total']}")
    return invoice


@router.get("/{invoice_id}", response_model=Invoice)
async def read_invoice(
    *,
    services: Services = Depends(get_services),
    invoice_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.invoices.get(invoice_id)


@router.put("/{invoice_id}", response_model=Invoice)
async def update_invoice(
    *,
    services: Services = Depends(get_services),
    invoice_id: str = Path(...),
    invoice_in: InvoiceUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.invoices.update(invoice_id, invoice_in)


@router.delete("/{invoice_id}", response_model=DeleteResult)
async def delete_invoice(
    *,
    services: Services = Depends(get_services),
    invoice_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    """
    Delete an invoice and release its time entries.
    """
    await services.invoices.delete(invoice_id)
    logger.info(f"Invoice {invoice_id} deleted by user: {current_user['id']}")
    return {"success": True}
