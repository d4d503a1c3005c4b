from sqlalchemy import Column, Text
from lawdesk.core.database import Base


class Client(Base):
    __tablename__ = "clients"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    first_name = Column(Text, nullable=True)
    middle_name = Column(Text, nullable=True)
    last_name = Column(Text, nullable=True)
    date_of_birth = Column(Text, nullable=True)
    place_of_birth = Column(Text, nullable=True)
    country_of_birth = Column(Text, nullable=True)
    company_name = Column(Text, nullable=True)
    arc_number = Column(Text, nullable=True)
    file_number = Column(Text, nullable=True)
    email = Column(Text, nullable=False, index=True)
    phone = Column(Text, nullable=False)
    address = Column(Text, nullable=True)
    type = Column(Text, nullable=False, server_default="Individual")
    notes = Column(Text, nullable=True)
    created_at = Column(Text, nullable=False, index=True)
