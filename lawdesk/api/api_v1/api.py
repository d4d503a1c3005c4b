from fastapi import APIRouter

from lawdesk.api.api_v1.endpoints import (
    auth,
    billing,
    cases,
    clients,
    court_logs,
    dashboard,
    expenses,
    invoices,
    messages,
    other_payments,
    payments,
    tasks,
    time_entries,
    users,
)

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(cases.router, prefix="/cases", tags=["cases"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(court_logs.router, prefix="/court-logs", tags=["court logs"])
api_router.include_router(messages.router, prefix="/messages", tags=["messages"])
api_router.include_router(time_entries.router, prefix="/time-entries", tags=["time entries"])
api_router.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
api_router.include_router(payments.router, prefix="/payments", tags=["payments"])
api_router.include_router(expenses.router, prefix="/expenses", tags=["expenses"])
api_router.include_router(other_payments.router, prefix="/other-payments", tags=["other payments"])
api_router.include_router(billing.router, prefix="/billing", tags=["billing"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
