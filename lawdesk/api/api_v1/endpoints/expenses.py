from typing import Any, Dict, Optional
from datetime import date
from fastapi import APIRouter, Depends, Path, Query, status
import logging

from lawdesk.api.deps import PageParams, get_services
from lawdesk.core.auth import get_current_user
from lawdesk.schemas.base import DeleteResult, Page
from lawdesk.schemas.expense import Expense, ExpenseCreate, ExpenseUpdate
from lawdesk.services import Services

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=Page[Expense])
async def list_expenses(
    *,
    services: Services = Depends(get_services),
    current_user: Dict[str, Any] = Depends(get_current_user),
    paging: PageParams = Depends(),
    category: Optional[str] = Query(None),
    expense_date: Optional[date] = Query(None, alias="date"),
    search: Optional[str] = Query(None, description="Match category, description or vendor"),
) -> Any:
    filters = {
        "category": category,
        "date": expense_date.isoformat() if expense_date else None,
        "search": search,
    }
    page = await services.expenses.list(filters, paging.page, paging.limit)
    return page.to_dict()


@router.post("", response_model=Expense, status_code=status.HTTP_201_CREATED)
async def create_expense(
    *,
    services: Services = Depends(get_services),
    expense_in: ExpenseCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    """
    Record an office expense. The date defaults to today.
    """
    logger.info(f"Expense in {expense_in.category} recorded by user: {current_user['id']}")
    return await services.expenses.create(expense_in, actor_id=current_user["id"])


@router.get("/{expense_id}", response_model=Expense)
async def read_expense(
    *,
    services: Services = Depends(get_services),
    expense_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.expenses.get(expense_id)


@router.put("/{expense_id}", response_model=Expense)
async def update_expense(
    *,
    services: Services = Depends(get_services),
    expense_id: str = Path(...),
    expense_in: ExpenseUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.expenses.update(expense_id, expense_in)


@router.delete("/{expense_id}", response_model=DeleteResult)
async def delete_expense(
    *,
    services: Services = Depends(get_services),
    expense_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    await services.expenses.delete(expense_id)
    return {"success": True}
