from typing import Any, Callable, Dict, Optional
import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lawdesk.core.errors import AuthenticationError, PermissionDenied
from lawdesk.schemas.user import UserRole

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """
    Resolve the bearer token to the current user record.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")
    return await request.app.state.services.auth.authenticate(credentials.credentials)


def require_role(*roles: UserRole) -> Callable:
    """
    Dependency factory restricting an endpoint to the given roles.
    """
    allowed = {role.value for role in roles}

    async def checker(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if current_user.get("role") not in allowed:
            logger.warning(
                f"User {current_user.get('id')} with role {current_user.get('role')} denied; requires {sorted(allowed)}"
            )
            raise PermissionDenied("Insufficient permissions")
        return current_user

    return checker


def get_current_admin(
    current_user: Dict[str, Any] = Depends(require_role(UserRole.admin)),
) -> Dict[str, Any]:
    return current_user
