# pizzaria/schemas/payment/payment.py
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field, field_validator


def only_digits(value: str) -> str:
    return "".join(filter(str.isdigit, value or ""))


class PixPayer(BaseModel):
    """Dados do pagador exigidos pela AbacatePay para gerar a cobrança PIX."""
    name: str
    phone: str
    email: str
    cpf: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = (v or "").strip()
        if len(v) < 3:
            raise ValueError("Nome deve ter pelo menos 3 caracteres")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        digits = only_digits(v)
        if len(digits) < 10:
            raise ValueError("Telefone deve ter pelo menos 10 dígitos")
        return digits

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = (v or "").strip()
        if "@" not in v:
            raise ValueError("Email inválido")
        return v

    @field_validator("cpf")
    @classmethod
    def validate_cpf(cls, v: str) -> str:
        digits = only_digits(v)
        if len(digits) != 11:
            raise ValueError("CPF deve conter 11 dígitos")
        return digits


class CheckPixRequest(BaseModel):
    billing_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("billing_id", "billingId"))


class CheckPixResponse(BaseModel):
    success: bool
    status: str
    is_paid: bool
