from typing import Any, Dict

from lawdesk.schemas.case import CaseStatus
from lawdesk.schemas.invoice import InvoiceStatus
from lawdesk.schemas.task import TaskStatus
from lawdesk.stores import StoreSet

RECENT_LIMIT = 5


class DashboardService:
    """Headline counts and short lists for the landing page."""

    def __init__(self, stores: StoreSet):
        self.stores = stores

    async def stats(self) -> Dict[str, Any]:
        cases = await self.stores.cases.all()
        tasks = await self.stores.tasks.all()
        invoices = await self.stores.invoices.all()

        active_statuses = (CaseStatus.open.value, CaseStatus.pending.value)
        open_tasks = [t for t in tasks if t.get("status") != TaskStatus.completed.value]

        # Store order is createdAt ascending
        recent_cases = list(reversed(cases))[:RECENT_LIMIT]
        upcoming_tasks = sorted(open_tasks, key=lambda t: (t.get("dueDate", ""), t.get("createdAt", "")))

        return {
            "totalClients": await self.stores.clients.count(),
            "activeCases": sum(1 for c in cases if c.get("status") in active_statuses),
            "pendingTasks": len(open_tasks),
            "unpaidInvoices": sum(1 for i in invoices if i.get("status") != InvoiceStatus.paid.value),
            "recentCases": recent_cases,
            "upcomingTasks": upcoming_tasks[:RECENT_LIMIT],
        }
