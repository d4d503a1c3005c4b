from typing import Any, Dict
from fastapi import APIRouter, Depends, status
import logging

from lawdesk.api.deps import get_services
from lawdesk.core.auth import get_current_user
from lawdesk.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest
from lawdesk.services import Services

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    *,
    services: Services = Depends(get_services),
    user_in: RegisterRequest,
) -> Any:
    """
    Register a new user and return a session token.
    """
    logger.info(f"Registration attempt for email: {user_in.email}")
    return await services.auth.register(user_in)


@router.post("/login", response_model=AuthResponse)
async def login(
    *,
    services: Services = Depends(get_services),
    credentials: LoginRequest,
) -> Any:
    """
    Exchange email and password for a session token.
    """
    return await services.auth.login(credentials)


@router.get("/me", response_model=MeResponse)
async def read_current_user(
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return {"user": current_user}
