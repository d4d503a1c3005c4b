from enum import Enum
from typing import Optional
from datetime import date
from pydantic import EmailStr, Field, model_validator
from lawdesk.schemas.base import CamelModel, RecordBase


class ClientType(str, Enum):
    individual = "Individual"
    corporate = "Corporate"


def display_name(
    client_type: Optional[str],
    first_name: Optional[str] = None,
    middle_name: Optional[str] = None,
    last_name: Optional[str] = None,
    company_name: Optional[str] = None,
) -> str:
    """Name shown for a client: the company for corporate clients, otherwise the joined name parts."""
    if client_type == ClientType.corporate.value and company_name:
        return company_name.strip()
    parts = [p.strip() for p in (first_name, middle_name, last_name) if p and p.strip()]
    return " ".join(parts)


class ClientBase(CamelModel):
    name: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    place_of_birth: Optional[str] = None
    country_of_birth: Optional[str] = None
    company_name: Optional[str] = None
    arc_number: Optional[str] = None
    file_number: Optional[str] = None
    email: EmailStr
    phone: str = Field(..., min_length=1)
    address: Optional[str] = None
    type: ClientType = ClientType.individual
    notes: Optional[str] = None


class ClientCreate(ClientBase):
    @model_validator(mode="after")
    def fill_display_name(self):
        if not self.name or not self.name.strip():
            self.name = display_name(
                self.type.value, self.first_name, self.middle_name, self.last_name, self.company_name
            ) or None
        if not self.name:
            raise ValueError("name, first/last name or company name is required")
        return self


class ClientUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    place_of_birth: Optional[str] = None
    country_of_birth: Optional[str] = None
    company_name: Optional[str] = None
    arc_number: Optional[str] = None
    file_number: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    type: Optional[ClientType] = None
    notes: Optional[str] = None


class Client(RecordBase):
    name: str
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[str] = None
    place_of_birth: Optional[str] = None
    country_of_birth: Optional[str] = None
    company_name: Optional[str] = None
    arc_number: Optional[str] = None
    file_number: Optional[str] = None
    email: str
    phone: str
    address: Optional[str] = None
    type: ClientType = ClientType.individual
    notes: Optional[str] = None
