from enum import Enum
from typing import Optional
import datetime
from pydantic import Field
from lawdesk.schemas.base import CamelModel, RecordBase


class OtherPaymentType(str, Enum):
    income = "Income"
    expense = "Expense"


class OtherPaymentCreate(CamelModel):
    type: OtherPaymentType
    category: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    date: Optional[datetime.date] = None
    description: str = ""
    reference: Optional[str] = None


class OtherPaymentUpdate(CamelModel):
    type: Optional[OtherPaymentType] = None
    category: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, gt=0)
    date: Optional[datetime.date] = None
    description: Optional[str] = None
    reference: Optional[str] = None


class OtherPayment(RecordBase):
    """Income or outgoing money not tied to a client ledger entry."""

    type: OtherPaymentType
    category: str
    amount: float
    date: str
    description: str = ""
    reference: Optional[str] = None
