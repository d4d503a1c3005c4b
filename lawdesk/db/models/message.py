from sqlalchemy import Boolean, Column, Integer, Table, Text, ForeignKey
from lawdesk.core.database import Base

message_recipients = Table(
    "message_recipients",
    Base.metadata,
    Column("message_id", Text, ForeignKey("messages.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Text, primary_key=True),
    Column("position", Integer, nullable=False, server_default="0"),
)


class Message(Base):
    __tablename__ = "messages"

    id = Column(Text, primary_key=True)
    subject = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    from_user_id = Column(Text, nullable=False, index=True)
    case_id = Column(Text, nullable=True)
    client_id = Column(Text, nullable=True)
    read = Column(Boolean, nullable=False, server_default="0")
    created_at = Column(Text, nullable=False, index=True)
