"""
Entity descriptions shared by every record store backend.

An ``EntitySpec`` names a collection, the fields a record may carry, the
defaults applied on create, and the filters ``list`` accepts. Every backend
interprets filters from these descriptions.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Tuple, Type, get_args
import time

from pydantic import BaseModel

from lawdesk.schemas.case import Case
from lawdesk.schemas.client import Client
from lawdesk.schemas.court_log import CourtLog
from lawdesk.schemas.expense import Expense
from lawdesk.schemas.invoice import Invoice
from lawdesk.schemas.message import Message
from lawdesk.schemas.other_payment import OtherPayment
from lawdesk.schemas.payment import Payment
from lawdesk.schemas.task import Task
from lawdesk.schemas.time_entry import TimeEntry
from lawdesk.schemas.user import User


@dataclass(frozen=True)
class EntitySpec:
    name: str
    label: str
    id_prefix: str
    storage_key: str
    schema: Type[BaseModel]
    defaults: Callable[[], Dict[str, Any]] = dict
    # filter key -> fields it is matched against; a list field matches by membership
    filters: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    search_fields: Tuple[str, ...] = ()
    list_fields: Tuple[str, ...] = ()
    touch_on_update: bool = False

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(
            info.alias or name for name, info in self.schema.model_fields.items()
        )

    @property
    def non_nullable_fields(self) -> Tuple[str, ...]:
        """Fields whose stored value may never be None; list fields clear to []."""
        return tuple(
            info.alias or name
            for name, info in self.schema.model_fields.items()
            if type(None) not in get_args(info.annotation)
            and (info.alias or name) not in self.list_fields + ("id", "createdAt", "updatedAt")
        )

    @property
    def filter_keys(self) -> Tuple[str, ...]:
        keys = tuple(self.filters)
        return keys + ("search",) if self.search_fields else keys


def _equality(*names: str) -> Dict[str, Tuple[str, ...]]:
    return {name: (name,) for name in names}


def _today() -> str:
    return date.today().isoformat()


USERS = EntitySpec(
    name="users",
    label="User",
    id_prefix="user",
    storage_key="lawfirm_users",
    schema=User,
    defaults=lambda: {"role": "Staff", "status": "active"},
    filters=_equality("role", "status", "email"),
    search_fields=("name", "email"),
)

CLIENTS = EntitySpec(
    name="clients",
    label="Client",
    id_prefix="client",
    storage_key="lawfirm_clients",
    schema=Client,
    defaults=lambda: {"type": "Individual"},
    filters=_equality("type", "email"),
    search_fields=("name", "firstName", "lastName", "companyName", "email", "phone"),
)

CASES = EntitySpec(
    name="cases",
    label="Case",
    id_prefix="case",
    storage_key="lawfirm_cases",
    schema=Case,
    defaults=lambda: {
        "caseNumber": f"CASE-{int(time.time() * 1000)}",
        "type": "General",
        "status": "Open",
        "assignedTo": [],
    },
    filters=_equality("status", "type", "clientId", "assignedTo"),
    search_fields=("title", "caseNumber"),
    list_fields=("assignedTo",),
    touch_on_update=True,
)

TASKS = EntitySpec(
    name="tasks",
    label="Task",
    id_prefix="task",
    storage_key="lawfirm_tasks",
    schema=Task,
    defaults=lambda: {"dueDate": _today(), "priority": "Medium", "status": "Todo"},
    filters=_equality("assignedTo", "caseId", "status", "priority"),
    search_fields=("title",),
)

COURT_LOGS = EntitySpec(
    name="court_logs",
    label="Court log",
    id_prefix="court",
    storage_key="lawfirm_court_logs",
    schema=CourtLog,
    defaults=lambda: {
        "clientName": "",
        "purpose": "",
        "reminderEnabled": True,
        "reminderDaysBefore": 7,
        "reminderSentToLawyer": False,
        "reminderSentToClient": False,
        "status": "Scheduled",
    },
    filters=_equality("clientId", "caseId", "status", "courtDate"),
    search_fields=("courtName", "clientName", "purpose"),
    touch_on_update=True,
)

MESSAGES = EntitySpec(
    name="messages",
    label="Message",
    id_prefix="msg",
    storage_key="lawfirm_messages",
    schema=Message,
    defaults=lambda: {"toUserIds": [], "read": False},
    filters={
        **_equality("fromUserId", "caseId", "clientId", "read"),
        "recipientId": ("toUserIds",),
        "userId": ("fromUserId", "toUserIds"),
    },
    search_fields=("subject", "content"),
    list_fields=("toUserIds",),
)

TIME_ENTRIES = EntitySpec(
    name="time_entries",
    label="Time entry",
    id_prefix="time",
    storage_key="lawfirm_time_entries",
    schema=TimeEntry,
    defaults=lambda: {"date": _today(), "duration": 0, "description": "", "hourlyRate": 0, "billable": True},
    filters=_equality("caseId", "clientId", "userId", "invoiceId", "billable"),
    search_fields=("description",),
)

INVOICES = EntitySpec(
    name="invoices",
    label="Invoice",
    id_prefix="inv",
    storage_key="lawfirm_invoices",
    schema=Invoice,
    defaults=lambda: {
        "invoiceNumber": f"INV-{str(int(time.time() * 1000))[-6:]}",
        "timeEntryIds": [],
        "subtotal": 0,
        "tax": 0,
        "total": 0,
        "status": "Draft",
    },
    filters={**_equality("clientId", "status"), "timeEntryId": ("timeEntryIds",)},
    search_fields=("invoiceNumber", "notes"),
    list_fields=("timeEntryIds",),
)

PAYMENTS = EntitySpec(
    name="payments",
    label="Payment",
    id_prefix="pay",
    storage_key="lawfirm_payments",
    schema=Payment,
    defaults=lambda: {
        "clientName": "",
        "paidAmount": 0,
        "status": "Pending",
        "description": "",
        "installments": [],
    },
    filters=_equality("clientId", "caseId", "status"),
    search_fields=("description", "clientName"),
)

EXPENSES = EntitySpec(
    name="expenses",
    label="Expense",
    id_prefix="exp",
    storage_key="billing-expenses",
    schema=Expense,
    defaults=lambda: {"date": _today(), "description": ""},
    filters=_equality("category", "date"),
    search_fields=("category", "description", "vendor"),
)

OTHER_PAYMENTS = EntitySpec(
    name="other_payments",
    label="Other payment",
    id_prefix="other",
    storage_key="billing-other",
    schema=OtherPayment,
    defaults=lambda: {"date": _today(), "description": ""},
    filters=_equality("type", "category", "date"),
    search_fields=("category", "description", "reference"),
)

ALL_ENTITIES = (
    USERS,
    CLIENTS,
    CASES,
    TASKS,
    COURT_LOGS,
    MESSAGES,
    TIME_ENTRIES,
    INVOICES,
    PAYMENTS,
    EXPENSES,
    OTHER_PAYMENTS,
)
