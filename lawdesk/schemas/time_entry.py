from typing import Optional
import datetime
from pydantic import Field
from lawdesk.schemas.base import CamelModel, RecordBase


class TimeEntryCreate(CamelModel):
    case_id: str = Field(..., min_length=1)
    client_id: str = Field(..., min_length=1)
    user_id: Optional[str] = None
    date: Optional[datetime.date] = None
    duration: float = Field(..., ge=0)
    description: str = ""
    hourly_rate: float = Field(..., ge=0)
    billable: bool = True


class TimeEntryUpdate(CamelModel):
    case_id: Optional[str] = Field(None, min_length=1)
    client_id: Optional[str] = Field(None, min_length=1)
    user_id: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime.date] = None
    duration: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    billable: Optional[bool] = None


class TimeEntry(RecordBase):
    case_id: str
    client_id: str
    user_id: str
    date: str
    duration: float
    description: str = ""
    hourly_rate: float
    billable: bool = True
    invoice_id: Optional[str] = None
