from sqlalchemy import Column, Text
from lawdesk.core.database import Base


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Text, primary_key=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    assigned_to = Column(Text, nullable=False, index=True)
    case_id = Column(Text, nullable=True, index=True)
    due_date = Column(Text, nullable=False)
    priority = Column(Text, nullable=False, server_default="Medium")
    status = Column(Text, nullable=False, server_default="Todo")
    created_at = Column(Text, nullable=False, index=True)
