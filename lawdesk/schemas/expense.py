from typing import Optional
import datetime
from pydantic import Field
from lawdesk.schemas.base import CamelModel, RecordBase

EXPENSE_CATEGORIES = (
    "Office Rent",
    "Utilities",
    "Office Supplies",
    "Software & Subscriptions",
    "Professional Services",
    "Travel",
    "Marketing",
    "Insurance",
    "Taxes",
    "Salaries",
    "Legal Research",
    "Court Fees",
    "Other",
)


class ExpenseCreate(CamelModel):
    category: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    date: Optional[datetime.date] = None
    description: str = ""
    vendor: Optional[str] = None
    receipt: Optional[str] = None


class ExpenseUpdate(CamelModel):
    category: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, gt=0)
    date: Optional[datetime.date] = None
    description: Optional[str] = None
    vendor: Optional[str] = None
    receipt: Optional[str] = None


class Expense(RecordBase):
    category: str
    amount: float
    date: str
    description: str = ""
    vendor: Optional[str] = None
    receipt: Optional[str] = None
