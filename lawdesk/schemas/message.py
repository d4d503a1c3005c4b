from typing import List, Optional
from pydantic import Field
from lawdesk.schemas.base import CamelModel, RecordBase


class MessageCreate(CamelModel):
    subject: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    from_user_id: Optional[str] = None
    to_user_ids: List[str] = Field(..., min_length=1)
    case_id: Optional[str] = None
    client_id: Optional[str] = None


class MessageUpdate(CamelModel):
    subject: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    to_user_ids: Optional[List[str]] = Field(None, min_length=1)
    case_id: Optional[str] = None
    client_id: Optional[str] = None
    read: Optional[bool] = None


class Message(RecordBase):
    subject: str
    content: str
    from_user_id: str
    to_user_ids: List[str] = []
    case_id: Optional[str] = None
    client_id: Optional[str] = None
    read: bool = False
