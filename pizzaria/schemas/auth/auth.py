from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class AuthCredentials(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=6)
    phone: str = Field(..., min_length=8, max_length=20)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Email inválido")
        return v


class Token(BaseModel):
    token: str
    token_type: str = "bearer"


class MeResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    roles: List[str] = []
    is_employee: bool
    is_admin: bool
