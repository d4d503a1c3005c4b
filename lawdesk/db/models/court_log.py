from sqlalchemy import Boolean, Column, Integer, Text
from lawdesk.core.database import Base


class CourtLog(Base):
    __tablename__ = "court_logs"

    id = Column(Text, primary_key=True)
    client_id = Column(Text, nullable=False, index=True)
    client_name = Column(Text, nullable=False, server_default="")
    case_id = Column(Text, nullable=True, index=True)
    case_number = Column(Text, nullable=True)
    court_date = Column(Text, nullable=False)
    court_time = Column(Text, nullable=False)
    court_name = Column(Text, nullable=False)
    court_address = Column(Text, nullable=True)
    judge_or_panel = Column(Text, nullable=True)
    purpose = Column(Text, nullable=False, server_default="")
    notes = Column(Text, nullable=True)
    reminder_enabled = Column(Boolean, nullable=False, server_default="1")
    reminder_days_before = Column(Integer, nullable=False, server_default="7")
    reminder_sent_to_lawyer = Column(Boolean, nullable=False, server_default="0")
    reminder_sent_to_client = Column(Boolean, nullable=False, server_default="0")
    status = Column(Text, nullable=False, server_default="Scheduled")
    created_at = Column(Text, nullable=False, index=True)
    updated_at = Column(Text, nullable=False)
