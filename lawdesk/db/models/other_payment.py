from sqlalchemy import Column, Float, Text
from lawdesk.core.database import Base


class OtherPayment(Base):
    __tablename__ = "other_payments"

    id = Column(Text, primary_key=True)
    type = Column(Text, nullable=False, index=True)
    category = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    date = Column(Text, nullable=False)
    description = Column(Text, nullable=False, server_default="")
    reference = Column(Text, nullable=True)
    created_at = Column(Text, nullable=False, index=True)
