"""
Invoices, the payment ledger, expenses and the billing summary.

Invoice totals are derived from the linked time entries unless the caller
supplies a subtotal. Payment amounts only change through recorded
installments, so ``balance == totalAmount - paidAmount`` always holds.
"""

from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional
import logging

from lawdesk.core.errors import InvalidReference, LedgerError, RecordNotFound, ReferenceConflict
from lawdesk.schemas.expense import ExpenseCreate, ExpenseUpdate
from lawdesk.schemas.invoice import InvoiceCreate, InvoiceStatus, InvoiceUpdate
from lawdesk.schemas.other_payment import OtherPaymentCreate, OtherPaymentType, OtherPaymentUpdate
from lawdesk.schemas.payment import InstallmentCreate, PaymentCreate, PaymentStatus, PaymentUpdate
from lawdesk.services.records import Payload, RecordService, validate_payload
from lawdesk.stores import StoreSet
from lawdesk.stores.base import Record, new_id

logger = logging.getLogger(__name__)


def _money(value: float) -> float:
    return round(float(value), 2)


def billable_amount(entries: Iterable[Record]) -> float:
    """Sum of ``duration * hourlyRate`` over the billable entries."""
    return _money(
        sum(e.get("duration", 0) * e.get("hourlyRate", 0) for e in entries if e.get("billable", True))
    )


def ledger_status(total_amount: float, paid_amount: float) -> str:
    if _money(total_amount - paid_amount) <= 0:
        return PaymentStatus.paid.value
    if paid_amount > 0:
        return PaymentStatus.partial.value
    return PaymentStatus.pending.value


class InvoiceService(RecordService):
    entity = "invoices"
    create_schema = InvoiceCreate
    update_schema = InvoiceUpdate

    def __init__(self, stores: StoreSet, latency: float = 0.0, due_days: int = 30):
        super().__init__(stores, latency)
        self.due_days = due_days

    async def _entries_for(
        self, entry_ids: List[str], client_id: str, invoice_id: Optional[str]
    ) -> List[Record]:
        entries = []
        for entry_id in entry_ids:
            try:
                entry = await self.stores.time_entries.get(entry_id)
            except RecordNotFound:
                raise InvalidReference(f"Time entry {entry_id} does not exist")
            if entry.get("clientId") != client_id:
                raise InvalidReference(f"Time entry {entry_id} belongs to another client")
            linked = entry.get("invoiceId")
            if linked and linked != invoice_id:
                raise ReferenceConflict(f"Time entry {entry_id} is already on invoice {linked}")
            entries.append(entry)
        return entries

    async def _link(self, entry_ids: Iterable[str], invoice_id: Optional[str]) -> None:
        for entry_id in entry_ids:
            if await self.stores.time_entries.exists(entry_id):
                await self.stores.time_entries.update(entry_id, {"invoiceId": invoice_id})

    async def before_create(self, fields: Dict[str, Any], actor_id: Optional[str]) -> Dict[str, Any]:
        fields["timeEntryIds"] = list(dict.fromkeys(fields.get("timeEntryIds") or []))
        if not await self.stores.clients.exists(fields["clientId"]):
            raise InvalidReference(f"Client {fields['clientId']} does not exist")
        entries = await self._entries_for(fields["timeEntryIds"], fields["clientId"], None)
        if fields.get("subtotal") is None:
            fields["subtotal"] = billable_amount(entries)
        fields["total"] = _money(fields["subtotal"] + fields.get("tax", 0))

        issued = fields.get("issuedDate") or date.today().isoformat()
        fields["issuedDate"] = issued
        if not fields.get("dueDate"):
            fields["dueDate"] = (date.fromisoformat(issued) + timedelta(days=self.due_days)).isoformat()
        if fields.get("status") == InvoiceStatus.paid.value and not fields.get("paidDate"):
            fields["paidDate"] = date.today().isoformat()
        return fields

    async def after_create(self, record: Record) -> None:
        await self._link(record.get("timeEntryIds", []), record["id"])

    async def before_update(self, current: Record, fields: Dict[str, Any]) -> Dict[str, Any]:
        if "timeEntryIds" in fields:
            fields["timeEntryIds"] = list(dict.fromkeys(fields["timeEntryIds"] or []))
            entries = await self._entries_for(fields["timeEntryIds"], current["clientId"], current["id"])
            if "subtotal" not in fields:
                fields["subtotal"] = billable_amount(entries)
        if "subtotal" in fields or "tax" in fields:
            subtotal = fields.get("subtotal", current.get("subtotal", 0))
            tax = fields.get("tax", current.get("tax", 0))
            fields["total"] = _money(subtotal + tax)
        if (
            fields.get("status") == InvoiceStatus.paid.value
            and not fields.get("paidDate")
            and not current.get("paidDate")
        ):
            fields["paidDate"] = date.today().isoformat()
        return fields

    async def after_update(self, previous: Record, record: Record) -> None:
        before = previous.get("timeEntryIds", [])
        after = record.get("timeEntryIds", [])
        await self._link([e for e in before if e not in after], None)
        await self._link([e for e in after if e not in before], record["id"])


class PaymentService(RecordService):
    entity = "payments"
    create_schema = PaymentCreate
    update_schema = PaymentUpdate

    async def before_create(self, fields: Dict[str, Any], actor_id: Optional[str]) -> Dict[str, Any]:
        total = _money(fields["totalAmount"])
        fields.update(
            totalAmount=total,
            paidAmount=0,
            balance=total,
            status=PaymentStatus.pending.value,
            installments=[],
        )
        return fields

    async def enrich(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        if fields.get("clientId"):
            client = await self.stores.clients.get(fields["clientId"])
            fields["clientName"] = client.get("name", "")
        if fields.get("caseId"):
            case = await self.stores.cases.get(fields["caseId"])
            fields["caseName"] = case.get("title")
        return fields

    async def before_update(self, current: Record, fields: Dict[str, Any]) -> Dict[str, Any]:
        status = fields.get("status")
        if status is None:
            return fields
        derived = ledger_status(current["totalAmount"], current["paidAmount"])
        if status == PaymentStatus.overdue.value:
            if derived == PaymentStatus.paid.value:
                raise LedgerError("A settled payment cannot be overdue")
        elif status != derived:
            raise LedgerError(f"Payment status {status} does not match the recorded installments")
        return fields

    async def add_installment(self, payment_id: str, data: Payload) -> Record:
        """
        Record a (partial) payment against the ledger entry.

        The amount may not exceed the outstanding balance; the status becomes
        Partial, or Paid once the balance reaches zero.
        """
        await self.simulate_latency()
        request = validate_payload(InstallmentCreate, data)
        payment = await self.store.get(payment_id)
        total = payment["totalAmount"]
        balance = _money(total - payment["paidAmount"])
        if balance <= 0:
            raise LedgerError("Payment is already settled")
        amount = _money(request.amount)
        if amount <= 0:
            raise LedgerError("Amount must be positive")
        if amount > balance:
            raise LedgerError(f"Amount exceeds the remaining balance of {balance:.2f}")

        installment = {
            "id": new_id("inst"),
            "amount": amount,
            "date": (request.date or date.today()).isoformat(),
            "method": request.method.value,
        }
        if request.notes:
            installment["notes"] = request.notes

        paid = _money(payment["paidAmount"] + amount)
        record = await self.store.update(
            payment_id,
            {
                "paidAmount": paid,
                "balance": _money(total - paid),
                "status": ledger_status(total, paid),
                "installments": [*payment.get("installments", []), installment],
            },
        )
        logger.info(f"Recorded installment of {amount:.2f} on payment {payment_id}")
        return record


class ExpenseService(RecordService):
    entity = "expenses"
    create_schema = ExpenseCreate
    update_schema = ExpenseUpdate

    async def before_create(self, fields: Dict[str, Any], actor_id: Optional[str]) -> Dict[str, Any]:
        fields["amount"] = _money(fields["amount"])
        return fields

    async def before_update(self, current: Record, fields: Dict[str, Any]) -> Dict[str, Any]:
        if "amount" in fields:
            fields["amount"] = _money(fields["amount"])
        return fields


class OtherPaymentService(ExpenseService):
    entity = "other_payments"
    create_schema = OtherPaymentCreate
    update_schema = OtherPaymentUpdate


TOP_CLIENTS_LIMIT = 10


class BillingService:
    def __init__(self, stores: StoreSet):
        self.stores = stores

    @staticmethod
    def _by_client(payments: List[Record]) -> List[Dict[str, Any]]:
        """Ledger totals per client, largest invoiced amount first."""
        totals: Dict[str, Dict[str, Any]] = {}
        for p in payments:
            row = totals.setdefault(
                p["clientId"],
                {"clientId": p["clientId"], "clientName": p.get("clientName", ""), "invoiced": 0.0, "received": 0.0},
            )
            row["invoiced"] += p.get("totalAmount", 0)
            row["received"] += p.get("paidAmount", 0)
        rows = [
            {**row, "invoiced": _money(row["invoiced"]), "received": _money(row["received"])}
            for row in totals.values()
        ]
        rows.sort(key=lambda r: (-r["invoiced"], r["clientName"], r["clientId"]))
        return rows

    async def summary(self) -> Dict[str, Any]:
        payments = await self.stores.payments.all()
        invoices = await self.stores.invoices.all()
        expenses = await self.stores.expenses.all()
        other = await self.stores.other_payments.all()
        unbilled = [e for e in await self.stores.time_entries.all({"billable": True}) if not e.get("invoiceId")]

        total_received = _money(sum(p.get("paidAmount", 0) for p in payments))
        total_expenses = _money(sum(e.get("amount", 0) for e in expenses))
        other_income = _money(sum(o["amount"] for o in other if o.get("type") == OtherPaymentType.income.value))
        other_expense = _money(sum(o["amount"] for o in other if o.get("type") == OtherPaymentType.expense.value))
        total_income = _money(total_received + other_income)
        total_expense_all = _money(total_expenses + other_expense)
        by_client = self._by_client(payments)
        return {
            "totalInvoiced": _money(sum(p.get("totalAmount", 0) for p in payments)),
            "totalReceived": total_received,
            "totalPending": _money(sum(p.get("balance", 0) for p in payments)),
            "invoiceTotal": _money(sum(i.get("total", 0) for i in invoices)),
            "invoicePaid": _money(
                sum(i.get("total", 0) for i in invoices if i.get("status") == InvoiceStatus.paid.value)
            ),
            "unbilledAmount": billable_amount(unbilled),
            "totalExpenses": total_expenses,
            "otherIncome": other_income,
            "otherExpense": other_expense,
            "totalIncome": total_income,
            "totalExpenseAll": total_expense_all,
            "netProfit": _money(total_received - total_expenses),
            "netBalance": _money(total_income - total_expense_all),
            "byClient": by_client,
            "topClients": by_client[:TOP_CLIENTS_LIMIT],
        }
