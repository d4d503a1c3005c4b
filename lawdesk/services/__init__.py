"""
Service layer between the HTTP routers and the record stores.
"""

from dataclasses import dataclass
import logging

from lawdesk.core.config import Settings
from lawdesk.services.billing import (
    BillingService,
    ExpenseService,
    InvoiceService,
    OtherPaymentService,
    PaymentService,
)
from lawdesk.services.dashboard import DashboardService
from lawdesk.services.messages import MessageService
from lawdesk.services.records import (
    CaseService,
    ClientService,
    CourtLogService,
    RecordService,
    TaskService,
    TimeEntryService,
)
from lawdesk.services.users import AuthService, UserService
from lawdesk.stores import StoreSet

logger = logging.getLogger(__name__)


@dataclass
class Services:
    stores: StoreSet
    auth: AuthService
    users: UserService
    clients: ClientService
    cases: CaseService
    tasks: TaskService
    court_logs: CourtLogService
    messages: MessageService
    time_entries: TimeEntryService
    invoices: InvoiceService
    payments: PaymentService
    expenses: ExpenseService
    other_payments: OtherPaymentService
    billing: BillingService
    dashboard: DashboardService

    def for_entity(self, name: str) -> RecordService:
        return getattr(self, name)


def build_services(settings: Settings, stores: StoreSet) -> Services:
    """
    Wire one service per collection over ``stores``.

    The local backend gets a fixed artificial latency on every call.
    """
    latency = settings.LOCAL_LATENCY_MS / 1000 if stores.backend == "local" else 0.0
    if latency:
        logger.info(f"Simulating {settings.LOCAL_LATENCY_MS} ms latency for the local store")
    users = UserService(stores, latency)
    return Services(
        stores=stores,
        auth=AuthService(users, settings),
        users=users,
        clients=ClientService(stores, latency),
        cases=CaseService(stores, latency),
        tasks=TaskService(stores, latency),
        court_logs=CourtLogService(stores, latency),
        messages=MessageService(stores, latency),
        time_entries=TimeEntryService(stores, latency),
        invoices=InvoiceService(stores, latency, due_days=settings.INVOICE_DUE_DAYS),
        payments=PaymentService(stores, latency),
        expenses=ExpenseService(stores, latency),
        other_payments=OtherPaymentService(stores, latency),
        billing=BillingService(stores),
        dashboard=DashboardService(stores),
    )
