import pytest
from httpx import AsyncClient
from fastapi import status

pytestmark = pytest.mark.asyncio

JANE = {"name": "Jane Doe", "email": "jane@x.com", "phone": "555", "type": "Individual"}


async def _create(client: AsyncClient, path: str, payload: dict, headers: dict) -> dict:
    response = await client.post(path, json=payload, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


class TestClients:
    async def test_create_and_read_client(self, client: AsyncClient, admin_headers: dict):
        created = await _create(client, "/api/clients", JANE, admin_headers)
        assert created["id"].startswith("client-")
        assert created["createdAt"]
        assert created["name"] == "Jane Doe"

        response = await client.get(f"/api/clients/{created['id']}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == created

    async def test_name_derived_from_parts(self, client: AsyncClient, admin_headers: dict):
        created = await _create(
            client,
            "/api/clients",
            {"firstName": "Ana", "middleName": "M.", "lastName": "Kola", "email": "ana@x.com", "phone": "1"},
            admin_headers,
        )
        assert created["name"] == "Ana M. Kola"

        corporate = await _create(
            client,
            "/api/clients",
            {"type": "Corporate", "companyName": "Acme Sh.p.k.", "email": "info@acme.com", "phone": "2"},
            admin_headers,
        )
        assert corporate["name"] == "Acme Sh.p.k."

    async def test_client_without_any_name(self, client: AsyncClient, admin_headers: dict):
        response = await client.post(
            "/api/clients", json={"email": "x@x.com", "phone": "1"}, headers=admin_headers
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "name" in response.json()["message"]

    async def test_missing_client_is_404(self, client: AsyncClient, admin_headers: dict):
        response = await client.get("/api/clients/client-missing", headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"message": "Client not found"}

    async def test_requires_authentication(self, client: AsyncClient):
        response = await client.get("/api/clients")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_pagination_and_search(self, client: AsyncClient, admin_headers: dict):
        for i in range(5):
            await _create(
                client,
                "/api/clients",
                {"name": f"Client {i}", "email": f"c{i}@x.com", "phone": str(i)},
                admin_headers,
            )
        response = await client.get("/api/clients?page=2&limit=2", headers=admin_headers)
        body = response.json()
        assert [c["name"] for c in body["items"]] == ["Client 2", "Client 3"]
        assert body["pagination"] == {"page": 2, "limit": 2, "total": 5, "totalPages": 3}

        response = await client.get("/api/clients?search=client 4", headers=admin_headers)
        assert [c["name"] for c in response.json()["items"]] == ["Client 4"]

    async def test_limit_above_maximum_rejected(self, client: AsyncClient, admin_headers: dict):
        response = await client.get("/api/clients?limit=1000", headers=admin_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestCases:
    async def test_case_defaults_and_update(self, client: AsyncClient, admin_headers: dict):
        jane = await _create(client, "/api/clients", JANE, admin_headers)
        case = await _create(
            client, "/api/cases", {"title": "Asylum claim", "clientId": jane["id"]}, admin_headers
        )
        assert case["status"] == "Open"
        assert case["type"] == "General"
        assert case["caseNumber"].startswith("CASE-")
        assert case["assignedTo"] == []
        assert case["updatedAt"] == case["createdAt"]

        response = await client.put(
            f"/api/cases/{case['id']}", json={"status": "On Hold"}, headers=admin_headers
        )
        updated = response.json()
        assert updated["status"] == "On Hold"
        assert updated["title"] == "Asylum claim"
        assert updated["createdAt"] == case["createdAt"]
        assert updated["updatedAt"] >= case["updatedAt"]

    async def test_case_for_missing_client_rejected(self, client: AsyncClient, admin_headers: dict):
        response = await client.post(
            "/api/cases", json={"title": "Orphan", "clientId": "client-nope"}, headers=admin_headers
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json() == {"message": "Client client-nope does not exist"}

    async def test_filter_by_assignee(self, client: AsyncClient, admin_headers: dict):
        me = (await client.get("/api/auth/me", headers=admin_headers)).json()["user"]
        jane = await _create(client, "/api/clients", JANE, admin_headers)
        mine = await _create(
            client,
            "/api/cases",
            {"title": "Mine", "clientId": jane["id"], "assignedTo": [me["id"]]},
            admin_headers,
        )
        await _create(client, "/api/cases", {"title": "Other", "clientId": jane["id"]}, admin_headers)

        response = await client.get(f"/api/cases?assignedTo={me['id']}", headers=admin_headers)
        assert [c["id"] for c in response.json()["items"]] == [mine["id"]]

    async def test_delete_referenced_client_rejected(self, client: AsyncClient, admin_headers: dict):
        jane = await _create(client, "/api/clients", JANE, admin_headers)
        case = await _create(
            client, "/api/cases", {"title": "Residence permit", "clientId": jane["id"]}, admin_headers
        )

        response = await client.delete(f"/api/clients/{jane['id']}", headers=admin_headers)
        assert response.status_code == status.HTTP_409_CONFLICT
        assert "referenced" in response.json()["message"]

        response = await client.get("/api/cases", headers=admin_headers)
        assert response.json()["items"] == [case]

    async def test_delete_twice(self, client: AsyncClient, admin_headers: dict):
        jane = await _create(client, "/api/clients", JANE, admin_headers)
        response = await client.delete(f"/api/clients/{jane['id']}", headers=admin_headers)
        assert response.json() == {"success": True}

        response = await client.delete(f"/api/clients/{jane['id']}", headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestTasksAndCourtLogs:
    async def test_task_defaults(self, client: AsyncClient, admin_headers: dict):
        me = (await client.get("/api/auth/me", headers=admin_headers)).json()["user"]
        task = await _create(
            client,
            "/api/tasks",
            {"title": "File appeal", "assignedTo": me["id"], "dueDate": "2030-01-15"},
            admin_headers,
        )
        assert task["priority"] == "Medium"
        assert task["status"] == "Todo"
        assert task["dueDate"] == "2030-01-15"

    async def test_court_log_copies_names(self, client: AsyncClient, admin_headers: dict):
        jane = await _create(client, "/api/clients", JANE, admin_headers)
        case = await _create(
            client,
            "/api/cases",
            {"title": "Appeal", "caseNumber": "CASE-42", "clientId": jane["id"]},
            admin_headers,
        )
        log = await _create(
            client,
            "/api/court-logs",
            {
                "clientId": jane["id"],
                "caseId": case["id"],
                "courtDate": "2030-03-01",
                "courtTime": "09:30",
                "courtName": "Basic Court",
            },
            admin_headers,
        )
        assert log["clientName"] == "Jane Doe"
        assert log["caseNumber"] == "CASE-42"
        assert log["reminderEnabled"] is True
        assert log["reminderDaysBefore"] == 7
        assert log["status"] == "Scheduled"

        response = await client.put(
            f"/api/court-logs/{log['id']}", json={"caseId": None}, headers=admin_headers
        )
        updated = response.json()
        assert "caseId" not in updated or updated["caseId"] is None
        assert updated["caseNumber"] is None

    async def test_bad_court_time(self, client: AsyncClient, admin_headers: dict):
        jane = await _create(client, "/api/clients", JANE, admin_headers)
        response = await client.post(
            "/api/court-logs",
            json={"clientId": jane["id"], "courtDate": "2030-03-01", "courtTime": "9am", "courtName": "X"},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestMessages:
    async def test_send_and_mark_read(
        self, client: AsyncClient, admin_headers: dict, staff_headers: dict
    ):
        admin = (await client.get("/api/auth/me", headers=admin_headers)).json()["user"]
        staff = (await client.get("/api/auth/me", headers=staff_headers)).json()["user"]

        message = await _create(
            client,
            "/api/messages",
            {"subject": "Hearing", "content": "Moved to Monday", "toUserIds": [staff["id"]]},
            admin_headers,
        )
        assert message["fromUserId"] == admin["id"]
        assert message["read"] is False

        response = await client.get("/api/messages?read=false", headers=staff_headers)
        assert [m["id"] for m in response.json()["items"]] == [message["id"]]

        response = await client.post(f"/api/messages/{message['id']}/read", headers=staff_headers)
        assert response.json()["read"] is True

    async def test_non_participant_cannot_read(
        self, client: AsyncClient, admin_headers: dict, staff_headers: dict
    ):
        admin = (await client.get("/api/auth/me", headers=admin_headers)).json()["user"]
        message = await _create(
            client,
            "/api/messages",
            {"subject": "Note", "content": "To self", "toUserIds": [admin["id"]]},
            admin_headers,
        )
        response = await client.get(f"/api/messages/{message['id']}", headers=staff_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = await client.get("/api/messages", headers=staff_headers)
        assert response.json()["items"] == []

    async def test_staff_cannot_send_as_someone_else(
        self, client: AsyncClient, admin_headers: dict, staff_headers: dict
    ):
        admin = (await client.get("/api/auth/me", headers=admin_headers)).json()["user"]
        staff = (await client.get("/api/auth/me", headers=staff_headers)).json()["user"]

        response = await client.post(
            "/api/messages",
            json={"subject": "Raise", "content": "Approved", "fromUserId": admin["id"],
                  "toUserIds": [staff["id"]]},
            headers=staff_headers,
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
        response = await client.get("/api/messages", headers=admin_headers)
        assert response.json()["items"] == []

        own = await _create(
            client,
            "/api/messages",
            {"subject": "Hi", "content": "x", "fromUserId": staff["id"], "toUserIds": [admin["id"]]},
            staff_headers,
        )
        assert own["fromUserId"] == staff["id"]

    async def test_admin_may_send_on_behalf(
        self, client: AsyncClient, admin_headers: dict, staff_headers: dict
    ):
        admin = (await client.get("/api/auth/me", headers=admin_headers)).json()["user"]
        staff = (await client.get("/api/auth/me", headers=staff_headers)).json()["user"]
        message = await _create(
            client,
            "/api/messages",
            {"subject": "Leave", "content": "Out Friday", "fromUserId": staff["id"],
             "toUserIds": [admin["id"]]},
            admin_headers,
        )
        assert message["fromUserId"] == staff["id"]


class TestUsers:
    async def test_only_admin_creates_users(self, client: AsyncClient, staff_headers: dict):
        response = await client.post(
            "/api/users",
            json={"name": "New", "email": "new@example.com", "password": "secret123"},
            headers=staff_headers,
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {"message": "Insufficient permissions"}

    async def test_admin_cannot_delete_self(self, client: AsyncClient, admin_headers: dict):
        admin = (await client.get("/api/auth/me", headers=admin_headers)).json()["user"]
        response = await client.delete(f"/api/users/{admin['id']}", headers=admin_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_user_cannot_promote_self(self, client: AsyncClient, staff_headers: dict):
        me = (await client.get("/api/auth/me", headers=staff_headers)).json()["user"]
        response = await client.put(
            f"/api/users/{me['id']}", json={"role": "Admin"}, headers=staff_headers
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = await client.put(
            f"/api/users/{me['id']}", json={"name": "Renamed"}, headers=staff_headers
        )
        assert response.json()["name"] == "Renamed"

    async def test_deleted_user_cannot_login(
        self, client: AsyncClient, admin_headers: dict, test_user_data: dict
    ):
        created = await _create(client, "/api/users", test_user_data, admin_headers)
        response = await client.delete(f"/api/users/{created['id']}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK

        response = await client.post(
            "/api/auth/login",
            json={"email": test_user_data["email"], "password": test_user_data["password"]},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestHealth:
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["status"] == "ok"
        assert body["backend"] == "memory"
        assert body["clients"] == 0
