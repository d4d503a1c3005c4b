from sqlalchemy import Boolean, Column, Float, Text
from lawdesk.core.database import Base


class TimeEntry(Base):
    __tablename__ = "time_entries"

    id = Column(Text, primary_key=True)
    case_id = Column(Text, nullable=False, index=True)
    client_id = Column(Text, nullable=False, index=True)
    user_id = Column(Text, nullable=False)
    date = Column(Text, nullable=False)
    duration = Column(Float, nullable=False)
    description = Column(Text, nullable=True)
    hourly_rate = Column(Float, nullable=False)
    billable = Column(Boolean, nullable=False, server_default="1")
    invoice_id = Column(Text, nullable=True, index=True)
    created_at = Column(Text, nullable=False, index=True)
