from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Path, Query, status
import logging

from lawdesk.api.deps import PageParams, get_services
from lawdesk.core.auth import get_current_user
from lawdesk.core.errors import PermissionDenied
from lawdesk.schemas.base import DeleteResult, Page
from lawdesk.schemas.message import Message, MessageCreate, MessageUpdate
from lawdesk.schemas.user import UserRole
from lawdesk.services import Services

logger = logging.getLogger(__name__)
router = APIRouter()


def _is_participant(message: Dict[str, Any], user: Dict[str, Any]) -> bool:
    return message.get("fromUserId") == user["id"] or user["id"] in message.get("toUserIds", [])


def _ensure_participant(message: Dict[str, Any], user: Dict[str, Any]) -> None:
    if user.get("role") != UserRole.admin.value and not _is_participant(message, user):
        logger.warning(f"User {user['id']} denied access to message {message['id']}")
        raise PermissionDenied("You are not a participant in this message")


@router.get("", response_model=Page[Message])
async def list_messages(
    *,
    services: Services = Depends(get_services),
    current_user: Dict[str, Any] = Depends(get_current_user),
    paging: PageParams = Depends(),
    recipient_id: Optional[str] = Query(None, alias="recipientId"),
    from_user_id: Optional[str] = Query(None, alias="fromUserId"),
    case_id: Optional[str] = Query(None, alias="caseId"),
    client_id: Optional[str] = Query(None, alias="clientId"),
    read: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, description="Match subject or content"),
) -> Any:
    """
    Retrieve messages the current user sent or received.

    Admins see every message.
    """
    filters = {
        "recipientId": recipient_id,
        "fromUserId": from_user_id,
        "caseId": case_id,
        "clientId": client_id,
        "read": read,
        "search": search,
    }
    if current_user.get("role") != UserRole.admin.value:
        filters["userId"] = current_user["id"]
    page = await services.messages.list(filters, paging.page, paging.limit)
    return page.to_dict()


@router.post("", response_model=Message, status_code=status.HTTP_201_CREATED)
async def send_message(
    *,
    services: Services = Depends(get_services),
    message_in: MessageCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    """
    Send a message. The sender defaults to the current user; only admins may
    send on behalf of someone else.
    """
    is_admin = current_user.get("role") == UserRole.admin.value
    if not is_admin and message_in.from_user_id not in (None, current_user["id"]):
        logger.warning(f"User {current_user['id']} tried to send as {message_in.from_user_id}")
        raise PermissionDenied("Cannot send a message on behalf of another user")
    return await services.messages.create(message_in, actor_id=current_user["id"])


@router.get("/{message_id}", response_model=Message)
async def read_message(
    *,
    services: Services = Depends(get_services),
    message_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    message = await services.messages.get(message_id)
    _ensure_participant(message, current_user)
    return message


@router.put("/{message_id}", response_model=Message)
async def update_message(
    *,
    services: Services = Depends(get_services),
    message_id: str = Path(...),
    message_in: MessageUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    _ensure_participant(await services.messages.get(message_id), current_user)
    return await services.messages.update(message_id, message_in)


@router.post("/{message_id}/read", response_model=Message)
async def mark_message_read(
    *,
    services: Services = Depends(get_services),
    message_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    _ensure_participant(await services.messages.get(message_id), current_user)
    return await services.messages.mark_read(message_id)


@router.delete("/{message_id}", response_model=DeleteResult)
async def delete_message(
    *,
    services: Services = Depends(get_services),
    message_id: str = Path(...),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Any:
    _ensure_participant(await services.messages.get(message_id), current_user)
    await services.messages.delete(message_id)
    return {"success": True}
