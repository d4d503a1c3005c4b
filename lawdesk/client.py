"""
Async HTTP client for the LawDesk API.

Stores the token returned by ``login``/``register`` and sends it as a bearer
header. Any non-2xx response raises ``ApiError`` carrying the server's
``message``.
"""

from typing import Any, Dict, Optional
import logging

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001"


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or f"HTTP {response.status_code}")
    return f"HTTP {response.status_code}"


class Resource:
    """CRUD calls for one collection, e.g. ``/api/clients``."""

    def __init__(self, client: "LawDeskClient", path: str):
        self.client = client
        self.path = path

    async def list(self, page: int = 1, limit: Optional[int] = None, **filters: Any) -> Dict[str, Any]:
        params: Dict[str, Any] = {k: v for k, v in filters.items() if v is not None}
        params["page"] = page
        if limit is not None:
            params["limit"] = limit
        return await self.client.request("GET", self.path, params=params)

    async def get(self, record_id: str) -> Dict[str, Any]:
        return await self.client.request("GET", f"{self.path}/{record_id}")

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("POST", self.path, json=data)

    async def update(self, record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("PUT", f"{self.path}/{record_id}", json=data)

    async def delete(self, record_id: str) -> Dict[str, Any]:
        return await self.client.request("DELETE", f"{self.path}/{record_id}")


class MessagesResource(Resource):
    async def mark_read(self, message_id: str) -> Dict[str, Any]:
        return await self.client.request("POST", f"{self.path}/{message_id}/read")


class PaymentsResource(Resource):
    async def add_installment(self, payment_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("POST", f"{self.path}/{payment_id}/installments", json=data)


class LawDeskClient:
    """
    Usage::

        async with LawDeskClient("http://localhost:3001") as api:
            await api.login("admin@lawfirm.com", "admin123")
            page = await api.clients.list(search="doe")
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
        api_prefix: str = "/api",
    ):
        self.token = token
        self.api_prefix = api_prefix.rstrip("/")
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

        self.users = Resource(self, "/users")
        self.clients = Resource(self, "/clients")
        self.cases = Resource(self, "/cases")
        self.tasks = Resource(self, "/tasks")
        self.court_logs = Resource(self, "/court-logs")
        self.messages = MessagesResource(self, "/messages")
        self.time_entries = Resource(self, "/time-entries")
        self.invoices = Resource(self, "/invoices")
        self.payments = PaymentsResource(self, "/payments")
        self.expenses = Resource(self, "/expenses")
        self.other_payments = Resource(self, "/other-payments")

    async def __aenter__(self) -> "LawDeskClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    def set_token(self, token: Optional[str]) -> None:
        self.token = token

    async def request(self, method: str, path: str, prefixed: bool = True, **kwargs: Any) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        url = f"{self.api_prefix}{path}" if prefixed else path
        try:
            response = await self._http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ApiError(f"Request failed: {e}") from e
        if response.is_error:
            raise ApiError(_error_message(response), response.status_code)
        return response.json()

    # ---- auth ------------------------------------------------------------

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        result = await self.request("POST", "/auth/login", json={"email": email, "password": password})
        self.set_token(result["token"])
        return result

    async def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        payload = {"name": name, "email": email, "password": password}
        result = await self.request("POST", "/auth/register", json=payload)
        self.set_token(result["token"])
        return result

    async def me(self) -> Dict[str, Any]:
        return await self.request("GET", "/auth/me")

    def logout(self) -> None:
        self.set_token(None)

    # ---- reports ---------------------------------------------------------

    async def dashboard_stats(self) -> Dict[str, Any]:
        return await self.request("GET", "/dashboard/stats")

    async def billing_summary(self) -> Dict[str, Any]:
        return await self.request("GET", "/billing/summary")

    async def health(self) -> Dict[str, Any]:
        return await self.request("GET", "/health", prefixed=False)
