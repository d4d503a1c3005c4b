from enum import Enum
from typing import Optional
from pydantic import EmailStr, Field
from lawdesk.schemas.base import CamelModel, RecordBase


class UserRole(str, Enum):
    admin = "Admin"
    lawyer = "Lawyer"
    paralegal = "Paralegal"
    staff = "Staff"


class UserStatus(str, Enum):
    active = "active"
    inactive = "inactive"


class UserBase(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    role: UserRole = UserRole.staff
    status: UserStatus = UserStatus.active
    avatar_url: Optional[str] = None


class UserCreate(UserBase):
    password: str = Field(..., min_length=6, max_length=72)


class UserUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
    avatar_url: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6, max_length=72)


class User(RecordBase):
    name: str
    email: str
    role: UserRole
    status: UserStatus = UserStatus.active
    avatar_url: Optional[str] = None
