from typing import List
from lawdesk.schemas.base import CamelModel
from lawdesk.schemas.case import Case
from lawdesk.schemas.task import Task


class DashboardStats(CamelModel):
    total_clients: int
    active_cases: int
    pending_tasks: int
    unpaid_invoices: int
    recent_cases: List[Case]
    upcoming_tasks: List[Task]
