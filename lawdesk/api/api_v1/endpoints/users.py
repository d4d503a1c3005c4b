from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Path, Query, status
import logging

from lawdesk.api.deps import PageParams, get_services
from lawdesk.core.auth import get_current_admin, get_current_user
from lawdesk.core.errors import PermissionDenied
from lawdesk.schemas.base import DeleteResult, Page
from lawdesk.schemas.user import User, UserCreate, UserRole, UserStatus, UserUpdate
from lawdesk.services import Services

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=Page[User])
async def list_users(
    *,
    services: Services = Depends(get_services),
    current_user: Dict[str, Any] = Depends(get_current_user),
    paging: PageParams = Depends(),
    role: Optional[UserRole] = Query(None),
    user_status: Optional[UserStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, description="Match name or email"),
) -> Any:
    filters = {
        "role": role.value if role else None,
        "status": user_status.value if user_status else None,
        "search": search,
    }
    page = await services.users.list(filters, paging.page, paging.limit)
    return page.to_dict()


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    *,
    services: Services = Depends(get_services),
    user_in: UserCreate,
    current_user: Dict[str, Any] = Depends(get_current_admin),
) -> Any:
    """
    Create a user account. Admin only.
    """
    logger.info(f"User creation requested by admin: {current_user['id']}")
    return await services.users.create(user_in)


@router.get("/{user_id}", response_model=User)
async def read_user(
    *,
    services: Services = Depends(get_services),
    user_id: str = Path(..., description="The ID of the user to retrieve"),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    return await services.users.get(user_id)


@router.put("/{user_id}", response_model=User)
async def update_user(
    *,
    services: Services = Depends(get_services),
    user_id: str = Path(..., description="The ID of the user to update"),
    user_in: UserUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    """
    Update a user.

    Admins may update anyone; other users only themselves, and never their
    own role or status.
    """
    is_admin = current_user.get("role") == UserRole.admin.value
    if not is_admin:
        if current_user["id"] != user_id:
            logger.warning(f"Unauthorized user update attempt by user: {current_user['id']}")
            raise PermissionDenied("You can only update your own profile")
        if user_in.role is not None or user_in.status is not None:
            raise PermissionDenied("Only admins can change roles or status")
    return await services.users.update(user_id, user_in)


@router.delete("/{user_id}", response_model=DeleteResult)
async def delete_user(
    *,
    services: Services = Depends(get_services),
    user_id: str = Path(..., description="The ID of the user to delete"),
    current_user: Dict[str, Any] = Depends(get_current_admin),
) -> Any:
    """
    Delete a user. Admin only; an admin cannot delete their own account.
    """
    if current_user["id"] == user_id:
        raise PermissionDenied("You cannot delete your own account")
    await services.users.delete(user_id)
    logger.info(f"User {user_id} deleted by admin: {current_user['id']}")
    return {"success": True}
