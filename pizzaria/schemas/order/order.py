from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from pizzaria.enums.delivery_type import DeliveryType
from pizzaria.enums.order_status import OrderStatus
from pizzaria.enums.payment_method import PaymentMethod
from pizzaria.schemas.payment.payment import PixPayer


# --- ENDEREÇO DE ENTREGA ---
class DeliveryAddress(BaseModel):
    """Endereço informado no checkout; a validação de obrigatórios é feita no checkout."""
    street: str = ""
    number: str = ""
    complement: Optional[str] = ""
    neighborhood: str = ""
    city: Optional[str] = None
    cep: str = ""

    @field_validator("street", "number", "neighborhood", "cep")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return (v or "").strip()


# --- CHECKOUT ---
class CheckoutRequest(BaseModel):
    cart_code: str
    delivery_type: DeliveryType
    payment_method: PaymentMethod
    change: Optional[float] = Field(default=None, ge=0, description="Troco para quanto")
    address: Optional[DeliveryAddress] = None
    payer: Optional[PixPayer] = None


class CheckoutResponse(BaseModel):
    order: "OrderRead"
    pix: Optional[Dict[str, Any]] = None


# --- ORDER ITEM (snapshot) ---
class OrderItemRead(BaseModel):
    kind: str
    name: str
    description: str
    size: Optional[str] = None
    second_half: Optional[str] = None
    crust: Optional[str] = None
    addons: List[str] = []
    notes: str = ""
    quantity: int
    unit_price: float
    total_price: float


# --- ORDER READ ---
class OrderRead(BaseModel):
    id: int
    code: str
    user_id: int
    items: List[OrderItemRead]
    customer: Dict[str, Any]
    delivery_type: DeliveryType
    payment_method: PaymentMethod
    change: Optional[float] = None
    status: OrderStatus
    subtotal: float
    delivery_fee: float
    total: float
    billing_id: Optional[str] = None
    billing_url: Optional[str] = None
    estimated_delivery: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StatusUpdateRequest(BaseModel):
    status: OrderStatus


class StaffStats(BaseModel):
    recebido: int
    em_preparo: int
    saiu_entrega: int
    total: int


class StaffOrdersResponse(BaseModel):
    active: List[OrderRead]
    completed: List[OrderRead]
    stats: StaffStats


CheckoutResponse.model_rebuild()
