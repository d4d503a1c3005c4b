from pathlib import Path

import pytest

from lawdesk.core.config import Settings
from lawdesk.core.errors import AuthenticationError, InvalidRecord
from lawdesk.services import build_services
from lawdesk.services.billing import billable_amount, ledger_status
from lawdesk.stores import build_local_stores, build_memory_stores

pytestmark = pytest.mark.asyncio


class TestBuildServices:
    def test_latency_only_for_local_backend(self, tmp_path: Path):
        settings = Settings(LOCAL_LATENCY_MS=50)
        local = build_services(settings, build_local_stores(str(tmp_path / "store.json")))
        memory = build_services(settings, build_memory_stores())
        assert local.clients.latency == pytest.approx(0.05)
        assert memory.clients.latency == 0

    def test_invoice_due_days_configurable(self):
        services = build_services(Settings(INVOICE_DUE_DAYS=14), build_memory_stores())
        assert services.invoices.due_days == 14


class TestLedgerHelpers:
    def test_billable_amount_skips_non_billable(self):
        entries = [
            {"duration": 1.5, "hourlyRate": 100, "billable": True},
            {"duration": 3, "hourlyRate": 100, "billable": False},
            {"duration": 0.25, "hourlyRate": 80},
        ]
        assert billable_amount(entries) == 170

    @pytest.mark.parametrize(
        "total, paid, expected",
        [(100, 0, "Pending"), (100, 40, "Partial"), (100, 100, "Paid"), (0.1 + 0.2, 0.3, "Paid")],
    )
    def test_ledger_status(self, total, paid, expected):
        assert ledger_status(total, paid) == expected


class TestAuthService:
    async def test_token_for_deleted_user_rejected(self, services, test_user_data):
        session = await services.auth.register(test_user_data)
        await services.users.delete(session["user"]["id"])
        with pytest.raises(AuthenticationError, match="User no longer exists"):
            await services.auth.authenticate(session["token"])

    async def test_admin_not_seeded_twice(self, services):
        await services.auth.ensure_default_admin()
        assert await services.users.store.count({"role": "Admin"}) == 1

    async def test_time_entry_defaults_to_actor(self, services):
        admin = (await services.users.store.all({"role": "Admin"}))[0]
        client = await services.clients.create({"name": "Jane", "email": "j@x.com", "phone": "1"})
        case = await services.cases.create({"title": "Appeal", "clientId": client["id"]})

        entry = await services.time_entries.create(
            {"caseId": case["id"], "clientId": client["id"], "duration": 1, "hourlyRate": 10},
            actor_id=admin["id"],
        )
        assert entry["userId"] == admin["id"]

        with pytest.raises(InvalidRecord):
            await services.time_entries.create(
                {"caseId": case["id"], "clientId": client["id"], "duration": 1, "hourlyRate": 10}
            )
