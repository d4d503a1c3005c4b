from sqlalchemy import Column, Integer, Table, Text, ForeignKey
from lawdesk.core.database import Base

case_assignments = Table(
    "case_assignments",
    Base.metadata,
    Column("case_id", Text, ForeignKey("cases.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Text, primary_key=True),
    Column("position", Integer, nullable=False, server_default="0"),
)


class Case(Base):
    __tablename__ = "cases"

    id = Column(Text, primary_key=True)
    title = Column(Text, nullable=False)
    case_number = Column(Text, nullable=False)
    type = Column(Text, nullable=False, server_default="General")
    status = Column(Text, nullable=False, server_default="Open")
    client_id = Column(Text, nullable=False, index=True)
    description = Column(Text, nullable=True)
    created_at = Column(Text, nullable=False, index=True)
    updated_at = Column(Text, nullable=False)
