import pytest
from fastapi import FastAPI
from httpx import ASGITransport

from lawdesk.client import ApiError, LawDeskClient

pytestmark = pytest.mark.asyncio


@pytest.fixture
async def api(test_app: FastAPI):
    async with LawDeskClient("http://test", transport=ASGITransport(app=test_app)) as api:
        yield api


class TestLawDeskClient:
    async def test_login_then_crud(self, api: LawDeskClient, admin_credentials: dict):
        session = await api.login(admin_credentials["email"], admin_credentials["password"])
        assert api.token == session["token"]
        assert (await api.me())["user"]["email"] == admin_credentials["email"]

        jane = await api.clients.create({"name": "Jane Doe", "email": "jane@x.com", "phone": "555"})
        page = await api.clients.list(search="jane")
        assert [c["id"] for c in page["items"]] == [jane["id"]]

        updated = await api.clients.update(jane["id"], {"phone": "777"})
        assert updated["phone"] == "777"
        assert await api.clients.delete(jane["id"]) == {"success": True}

        with pytest.raises(ApiError) as excinfo:
            await api.clients.get(jane["id"])
        assert excinfo.value.status_code == 404
        assert excinfo.value.message == "Client not found"

    async def test_unauthenticated_call(self, api: LawDeskClient):
        with pytest.raises(ApiError) as excinfo:
            await api.dashboard_stats()
        assert excinfo.value.status_code == 401
        assert excinfo.value.message == "Access token required"

    async def test_logout_forgets_token(self, api: LawDeskClient, test_user_data: dict):
        await api.register(**test_user_data)
        assert api.token
        api.logout()
        with pytest.raises(ApiError):
            await api.me()

    async def test_installments_and_summary(self, api: LawDeskClient, admin_credentials: dict):
        await api.login(admin_credentials["email"], admin_credentials["password"])
        jane = await api.clients.create({"name": "Jane Doe", "email": "jane@x.com", "phone": "555"})
        payment = await api.payments.create(
            {"clientId": jane["id"], "totalAmount": 300, "dueDate": "2030-01-01"}
        )
        payment = await api.payments.add_installment(payment["id"], {"amount": 100})
        assert payment["balance"] == 200

        await api.expenses.create({"category": "Travel", "amount": 40})
        await api.other_payments.create({"type": "Income", "category": "Consulting", "amount": 10})

        summary = await api.billing_summary()
        assert summary["totalReceived"] == 100
        assert summary["netProfit"] == 60
        assert summary["netBalance"] == 70

    async def test_health_is_unprefixed(self, api: LawDeskClient):
        assert (await api.health())["status"] == "ok"
