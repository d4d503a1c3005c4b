from sqlalchemy import Column, Float, Integer, Table, Text, ForeignKey
from lawdesk.core.database import Base

invoice_time_entries = Table(
    "invoice_time_entries",
    Base.metadata,
    Column("invoice_id", Text, ForeignKey("invoices.id", ondelete="CASCADE"), primary_key=True),
    Column("time_entry_id", Text, primary_key=True),
    Column("position", Integer, nullable=False, server_default="0"),
)


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Text, primary_key=True)
    invoice_number = Column(Text, nullable=False)
    client_id = Column(Text, nullable=False, index=True)
    subtotal = Column(Float, nullable=False)
    tax = Column(Float, nullable=False, server_default="0")
    total = Column(Float, nullable=False)
    status = Column(Text, nullable=False, server_default="Draft")
    issued_date = Column(Text, nullable=True)
    due_date = Column(Text, nullable=True)
    paid_date = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(Text, nullable=False, index=True)
