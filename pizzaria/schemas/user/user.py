# pizzaria/schemas/user/user.py

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from pizzaria.enums.user_role import UserRole


def normalize_cep(v: str) -> str:
    cleaned = ''.join(filter(str.isdigit, v))
    if len(cleaned) != 8:
        raise ValueError("CEP deve conter exatamente 8 dígitos")
    return f"{cleaned[:5]}-{cleaned[5:]}"  # Formata com hífen


class AddressBase(BaseModel):
    street: str = Field(..., min_length=1)
    number: str = Field(..., min_length=1)
    neighborhood: str = Field(..., min_length=1)
    cep: str = Field(..., min_length=8, max_length=9)
    complement: Optional[str] = None
    city: Optional[str] = None

    @field_validator('cep')
    @classmethod
    def validate_cep(cls, v: str) -> str:
        return normalize_cep(v)


class AddressUpdate(AddressBase):
    pass


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2)
    phone: Optional[str] = Field(default=None, min_length=8, max_length=20)


class ProfileResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    complement: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    cep: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class UserResponse(ProfileResponse):
    roles: List[str] = Field(default_factory=list, validation_alias="role_names")
    is_active: bool


class RoleRequest(BaseModel):
    role: UserRole
