import pytest
from httpx import AsyncClient
from fastapi import status

pytestmark = pytest.mark.asyncio


class TestAuthentication:
    async def test_register_user(
        self,
        client: AsyncClient,
        test_user_data: dict
    ):
        """Test user registration."""
        response = await client.post(
            "/api/auth/register",
            json=test_user_data
        )
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["user"]["email"] == test_user_data["email"]
        assert data["user"]["role"] == "Staff"
        assert data["user"]["id"].startswith("user-")
        assert data["token"]
        assert "password" not in data["user"]

    async def test_register_ignores_requested_role(
        self,
        client: AsyncClient,
        test_user_data: dict
    ):
        """Self-registration always yields a Staff account."""
        response = await client.post(
            "/api/auth/register",
            json={**test_user_data, "role": "Admin"}
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["user"]["role"] == "Staff"

        headers = {"Authorization": f"Bearer {response.json()['token']}"}
        me = await client.get("/api/auth/me", headers=headers)
        assert me.json()["user"]["role"] == "Staff"
        response = await client.post(
            "/api/users",
            json={"name": "Mallory", "email": "m@example.com", "password": "secret123"},
            headers=headers
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_register_duplicate_email(
        self,
        client: AsyncClient,
        test_user_data: dict
    ):
        await client.post("/api/auth/register", json=test_user_data)
        response = await client.post("/api/auth/register", json=test_user_data)
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json() == {"message": "Email already registered"}

    async def test_register_short_password(
        self,
        client: AsyncClient,
        test_user_data: dict
    ):
        response = await client.post(
            "/api/auth/register",
            json={**test_user_data, "password": "123"}
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "password" in response.json()["message"]

    async def test_login_user(
        self,
        client: AsyncClient,
        test_user_data: dict
    ):
        """Test user login."""
        await client.post("/api/auth/register", json=test_user_data)

        response = await client.post(
            "/api/auth/login",
            json={
                "email": test_user_data["email"],
                "password": test_user_data["password"]
            }
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["token"]
        assert data["tokenType"] == "bearer"
        assert data["user"]["email"] == test_user_data["email"]

    async def test_login_wrong_password(
        self,
        client: AsyncClient,
        test_user_data: dict
    ):
        """Test login with wrong password."""
        await client.post("/api/auth/register", json=test_user_data)

        response = await client.post(
            "/api/auth/login",
            json={
                "email": test_user_data["email"],
                "password": "wrongpassword"
            }
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Invalid credentials"}

    async def test_login_unknown_email(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "whatever"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_default_admin_is_seeded(
        self,
        client: AsyncClient,
        admin_credentials: dict
    ):
        response = await client.post("/api/auth/login", json=admin_credentials)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["user"]["role"] == "Admin"

    async def test_get_current_user(
        self,
        client: AsyncClient,
        test_user_data: dict
    ):
        """Test getting current user details."""
        register_response = await client.post("/api/auth/register", json=test_user_data)
        token = register_response.json()["token"]

        response = await client.get(
            "/api/auth/me",
            headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["user"]["email"] == test_user_data["email"]
        assert "password" not in data["user"]

    async def test_me_requires_token(self, client: AsyncClient):
        response = await client.get("/api/auth/me")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Access token required"}

    async def test_me_rejects_garbage_token(self, client: AsyncClient):
        response = await client.get(
            "/api/auth/me",
            headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Invalid or expired token"}

    async def test_inactive_user_cannot_login(
        self,
        client: AsyncClient,
        admin_headers: dict,
        test_user_data: dict
    ):
        register_response = await client.post("/api/auth/register", json=test_user_data)
        user_id = register_response.json()["user"]["id"]

        response = await client.put(
            f"/api/users/{user_id}",
            json={"status": "inactive"},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_200_OK

        response = await client.post(
            "/api/auth/login",
            json={"email": test_user_data["email"], "password": test_user_data["password"]}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Account is inactive"}
