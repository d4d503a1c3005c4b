from sqlalchemy import Column, Float, JSON, Text
from lawdesk.core.database import Base


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Text, primary_key=True)
    client_id = Column(Text, nullable=False, index=True)
    client_name = Column(Text, nullable=False, server_default="")
    case_id = Column(Text, nullable=True)
    case_name = Column(Text, nullable=True)
    total_amount = Column(Float, nullable=False)
    paid_amount = Column(Float, nullable=False, server_default="0")
    balance = Column(Float, nullable=False)
    status = Column(Text, nullable=False, server_default="Pending")
    due_date = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    installments = Column(JSON, nullable=False, default=list)
    created_at = Column(Text, nullable=False, index=True)
