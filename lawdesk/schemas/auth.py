from pydantic import EmailStr, Field
from lawdesk.schemas.base import CamelModel
from lawdesk.schemas.user import User


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)


class AuthResponse(CamelModel):
    user: User
    token: str
    token_type: str = "bearer"


class MeResponse(CamelModel):
    user: User
