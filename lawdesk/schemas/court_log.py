from enum import Enum
from typing import Optional
from datetime import date
from pydantic import Field
from lawdesk.schemas.base import CamelModel, RecordBase


class CourtLogStatus(str, Enum):
    scheduled = "Scheduled"
    completed = "Completed"
    postponed = "Postponed"
    cancelled = "Cancelled"


class CourtLogCreate(CamelModel):
    client_id: str = Field(..., min_length=1)
    case_id: Optional[str] = None
    court_date: date
    court_time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    court_name: str = Field(..., min_length=1)
    court_address: Optional[str] = None
    judge_or_panel: Optional[str] = None
    purpose: str = ""
    notes: Optional[str] = None
    reminder_enabled: Optional[bool] = None
    reminder_days_before: Optional[int] = Field(None, ge=0)
    status: Optional[CourtLogStatus] = None


class CourtLogUpdate(CamelModel):
    client_id: Optional[str] = Field(None, min_length=1)
    case_id: Optional[str] = None
    court_date: Optional[date] = None
    court_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")
    court_name: Optional[str] = Field(None, min_length=1)
    court_address: Optional[str] = None
    judge_or_panel: Optional[str] = None
    purpose: Optional[str] = None
    notes: Optional[str] = None
    reminder_enabled: Optional[bool] = None
    reminder_days_before: Optional[int] = Field(None, ge=0)
    reminder_sent_to_lawyer: Optional[bool] = None
    reminder_sent_to_client: Optional[bool] = None
    status: Optional[CourtLogStatus] = None


class CourtLog(RecordBase):
    client_id: str
    client_name: str = ""
    case_id: Optional[str] = None
    case_number: Optional[str] = None
    court_date: str
    court_time: str
    court_name: str
    court_address: Optional[str] = None
    judge_or_panel: Optional[str] = None
    purpose: str = ""
    notes: Optional[str] = None
    reminder_enabled: bool
    reminder_days_before: int
    reminder_sent_to_lawyer: bool
    reminder_sent_to_client: bool
    status: CourtLogStatus
    updated_at: str
