from enum import Enum
from typing import List, Optional
from pydantic import Field
from lawdesk.schemas.base import CamelModel, RecordBase


class CaseType(str, Enum):
    general = "General"
    asylum = "Asylum"


class CaseStatus(str, Enum):
    open = "Open"
    pending = "Pending"
    closed = "Closed"
    on_hold = "On Hold"


class CaseCreate(CamelModel):
    title: str = Field(..., min_length=1)
    case_number: Optional[str] = None
    type: CaseType = CaseType.general
    status: CaseStatus = CaseStatus.open
    client_id: str = Field(..., min_length=1)
    assigned_to: List[str] = []
    description: Optional[str] = None


class CaseUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    case_number: Optional[str] = Field(None, min_length=1)
    type: Optional[CaseType] = None
    status: Optional[CaseStatus] = None
    client_id: Optional[str] = Field(None, min_length=1)
    assigned_to: Optional[List[str]] = None
    description: Optional[str] = None


class Case(RecordBase):
    title: str
    case_number: str
    type: CaseType
    status: CaseStatus
    client_id: str
    assigned_to: List[str] = []
    description: Optional[str] = None
    updated_at: str
