from sqlalchemy import Column, Float, Text
from lawdesk.core.database import Base


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Text, primary_key=True)
    category = Column(Text, nullable=False, index=True)
    amount = Column(Float, nullable=False)
    date = Column(Text, nullable=False)
    description = Column(Text, nullable=False, server_default="")
    vendor = Column(Text, nullable=True)
    receipt = Column(Text, nullable=True)
    created_at = Column(Text, nullable=False, index=True)
