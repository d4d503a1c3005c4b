from sqlalchemy import Column, Text, ForeignKey
from lawdesk.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    email = Column(Text, unique=True, nullable=False)
    role = Column(Text, nullable=False, server_default="Staff")
    status = Column(Text, nullable=False, server_default="active")
    avatar_url = Column(Text, nullable=True)
    created_at = Column(Text, nullable=False, index=True)


class UserCredential(Base):
    __tablename__ = "user_credentials"

    user_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    password_hash = Column(Text, nullable=False)
