from enum import Enum
from typing import List, Optional
import datetime
from pydantic import Field
from lawdesk.schemas.base import CamelModel, RecordBase


class PaymentStatus(str, Enum):
    pending = "Pending"
    partial = "Partial"
    paid = "Paid"
    overdue = "Overdue"


class PaymentMethod(str, Enum):
    cash = "Cash"
    card = "Card"
    bank_transfer = "Bank Transfer"
    check = "Check"
    other = "Other"


class Installment(CamelModel):
    id: str
    amount: float
    date: str
    method: PaymentMethod
    notes: Optional[str] = None


class PaymentCreate(CamelModel):
    client_id: str = Field(..., min_length=1)
    case_id: Optional[str] = None
    total_amount: float = Field(..., gt=0)
    due_date: datetime.date
    description: str = ""


class PaymentUpdate(CamelModel):
    due_date: Optional[datetime.date] = None
    description: Optional[str] = None
    status: Optional[PaymentStatus] = None


class InstallmentCreate(CamelModel):
    amount: float = Field(..., gt=0)
    method: PaymentMethod = PaymentMethod.cash
    date: Optional[datetime.date] = None
    notes: Optional[str] = None


class Payment(RecordBase):
    client_id: str
    client_name: str = ""
    case_id: Optional[str] = None
    case_name: Optional[str] = None
    total_amount: float
    paid_amount: float
    balance: float
    status: PaymentStatus
    due_date: str
    description: str = ""
    installments: List[Installment] = []


class ClientBalance(CamelModel):
    client_id: str
    client_name: str = ""
    invoiced: float
    received: float


class BillingSummary(CamelModel):
    total_invoiced: float
    total_received: float
    total_pending: float
    invoice_total: float
    invoice_paid: float
    unbilled_amount: float
    total_expenses: float
    other_income: float
    other_expense: float
    total_income: float
    total_expense_all: float
    net_profit: float
    net_balance: float
    by_client: List[ClientBalance] = []
    top_clients: List[ClientBalance] = []
