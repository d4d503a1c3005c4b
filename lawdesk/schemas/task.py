from enum import Enum
from typing import Optional
from datetime import date
from pydantic import Field
from lawdesk.schemas.base import CamelModel, RecordBase


class TaskPriority(str, Enum):
    low = "Low"
    medium = "Medium"
    high = "High"
    urgent = "Urgent"


class TaskStatus(str, Enum):
    todo = "Todo"
    in_progress = "In Progress"
    completed = "Completed"


class TaskCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    assigned_to: str = Field(..., min_length=1)
    case_id: Optional[str] = None
    due_date: date
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None


class TaskUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    assigned_to: Optional[str] = Field(None, min_length=1)
    case_id: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None


class Task(RecordBase):
    title: str
    description: Optional[str] = None
    assigned_to: str
    case_id: Optional[str] = None
    due_date: str
    priority: TaskPriority
    status: TaskStatus
