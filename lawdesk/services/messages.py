from typing import Any, Dict, Optional
import logging

from lawdesk.core.errors import InvalidRecord
from lawdesk.schemas.message import MessageCreate, MessageUpdate
from lawdesk.services.records import RecordService
from lawdesk.stores.base import Record

logger = logging.getLogger(__name__)


class MessageService(RecordService):
    entity = "messages"
    create_schema = MessageCreate
    update_schema = MessageUpdate

    async def before_create(self, fields: Dict[str, Any], actor_id: Optional[str]) -> Dict[str, Any]:
        if not fields.get("fromUserId"):
            if not actor_id:
                raise InvalidRecord("fromUserId is required")
            fields["fromUserId"] = actor_id
        return fields

    async def mark_read(self, message_id: str) -> Record:
        """Flag a message as read."""
        record = await self.update(message_id, {"read": True})
        logger.info(f"Message {message_id} marked read")
        return record

