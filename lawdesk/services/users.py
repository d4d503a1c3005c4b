"""
User accounts and authentication.

Password hashes never enter the user record; they live in the credential
store keyed by user id.
"""

from typing import Any, Dict, Optional
import logging

from lawdesk.core.config import Settings
from lawdesk.core.errors import AuthenticationError, DuplicateRecord, RecordNotFound
from lawdesk.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from lawdesk.schemas.auth import LoginRequest, RegisterRequest
from lawdesk.schemas.user import UserCreate, UserRole, UserUpdate
from lawdesk.services.records import Payload, RecordService, validate_payload
from lawdesk.stores.base import Record

logger = logging.getLogger(__name__)


class UserService(RecordService):
    entity = "users"
    create_schema = UserCreate
    update_schema = UserUpdate

    async def find_by_email(self, email: str) -> Optional[Record]:
        matches = await self.store.all({"email": email})
        return matches[0] if matches else None

    async def _ensure_email_free(self, email: str, user_id: Optional[str] = None) -> None:
        existing = await self.find_by_email(email)
        if existing and existing["id"] != user_id:
            raise DuplicateRecord("Email already registered")

    async def create(self, data: Payload, actor_id: Optional[str] = None) -> Record:
        await self.simulate_latency()
        fields = self._validate(self.create_schema, data, partial=False)
        password = fields.pop("password")
        await self._ensure_email_free(fields["email"])
        record = await self.store.create(fields)
        await self.stores.credentials.set(record["id"], get_password_hash(password))
        return record

    async def update(self, record_id: str, data: Payload) -> Record:
        await self.simulate_latency()
        fields = self._validate(self.update_schema, data, partial=True)
        self._reject_cleared(fields)
        password = fields.pop("password", None)
        if fields.get("email"):
            await self._ensure_email_free(fields["email"], record_id)
        record = await self.store.update(record_id, fields)
        if password:
            await self.stores.credentials.set(record_id, get_password_hash(password))
            logger.info(f"Password changed for user {record_id}")
        return record

    async def delete(self, record_id: str) -> None:
        await super().delete(record_id)
        await self.stores.credentials.delete(record_id)


class AuthService:
    def __init__(self, users: UserService, settings: Settings):
        self.users = users
        self.settings = settings

    def issue_token(self, user: Record) -> str:
        claims = {
            "id": user["id"],
            "email": user["email"],
            "role": user["role"],
            "name": user.get("name"),
        }
        return create_access_token(claims, secret=self.settings.JWT_SECRET)

    def _session(self, user: Record) -> Dict[str, Any]:
        return {"user": user, "token": self.issue_token(user), "tokenType": "bearer"}

    async def register(self, data: Payload) -> Dict[str, Any]:
        request = validate_payload(RegisterRequest, data)
        user = await self.users.create(
            UserCreate(
                name=request.name,
                email=request.email,
                password=request.password,
                role=UserRole.staff,
            )
        )
        logger.info(f"Registered user {user['id']}")
        return self._session(user)

    async def login(self, data: Payload) -> Dict[str, Any]:
        request = validate_payload(LoginRequest, data)
        await self.users.simulate_latency()
        user = await self.users.find_by_email(request.email)
        if user is None:
            logger.warning(f"Login attempt for unknown email {request.email}")
            raise AuthenticationError("Invalid credentials")
        password_hash = await self.users.stores.credentials.get(user["id"])
        if not verify_password(request.password, password_hash):
            logger.warning(f"Failed login for user {user['id']}")
            raise AuthenticationError("Invalid credentials")
        if user.get("status") != "active":
            raise AuthenticationError("Account is inactive")
        logger.info(f"User {user['id']} logged in")
        return self._session(user)

    async def authenticate(self, token: str) -> Record:
        """Resolve a bearer token to the current user record."""
        claims = decode_access_token(token, secret=self.settings.JWT_SECRET)
        if not claims or "id" not in claims:
            raise AuthenticationError("Invalid or expired token")
        try:
            user = await self.users.store.get(claims["id"])
        except RecordNotFound:
            raise AuthenticationError("User no longer exists")
        if user.get("status") != "active":
            raise AuthenticationError("Account is inactive")
        return user

    async def ensure_default_admin(self) -> Optional[Record]:
        """Create the configured admin account when there are no users at all."""
        if not self.settings.SEED_DEFAULT_USERS:
            return None
        if await self.users.store.count():
            return None
        admin = await self.users.create(
            UserCreate(
                name=self.settings.DEFAULT_ADMIN_NAME,
                email=self.settings.DEFAULT_ADMIN_EMAIL,
                password=self.settings.DEFAULT_ADMIN_PASSWORD,
                role=UserRole.admin,
            )
        )
        logger.info(f"Seeded default admin {admin['email']}")
        return admin

