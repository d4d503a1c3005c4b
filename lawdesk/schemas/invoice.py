from enum import Enum
from typing import List, Optional
from datetime import date
from pydantic import Field
from lawdesk.schemas.base import CamelModel, RecordBase


class InvoiceStatus(str, Enum):
    draft = "Draft"
    sent = "Sent"
    paid = "Paid"
    overdue = "Overdue"


class InvoiceCreate(CamelModel):
    invoice_number: Optional[str] = None
    client_id: str = Field(..., min_length=1)
    time_entry_ids: List[str] = []
    subtotal: Optional[float] = Field(None, ge=0)
    tax: float = Field(0, ge=0)
    status: Optional[InvoiceStatus] = None
    issued_date: Optional[date] = None
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    notes: Optional[str] = None


class InvoiceUpdate(CamelModel):
    invoice_number: Optional[str] = Field(None, min_length=1)
    time_entry_ids: Optional[List[str]] = None
    subtotal: Optional[float] = Field(None, ge=0)
    tax: Optional[float] = Field(None, ge=0)
    status: Optional[InvoiceStatus] = None
    issued_date: Optional[date] = None
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    notes: Optional[str] = None


class Invoice(RecordBase):
    invoice_number: str
    client_id: str
    time_entry_ids: List[str] = []
    subtotal: float
    tax: float
    total: float
    status: InvoiceStatus
    issued_date: str
    due_date: str
    paid_date: Optional[str] = None
    notes: Optional[str] = None
