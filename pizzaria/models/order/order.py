from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, TYPE_CHECKING
import uuid
from sqlmodel import Field, Relationship, SQLModel
from sqlalchemy import Column, Enum, JSON

from pizzaria.core.utils.hash_utils import generate_hash
from pizzaria.enums.delivery_type import DeliveryType
from pizzaria.enums.order_status import OrderStatus
from pizzaria.enums.payment_method import PaymentMethod

if TYPE_CHECKING:
    from pizzaria.models.user.user import User

ORDER_CODE_HASH_LENGTH = 10

def generate_order_code() -> str:
    timestamp = datetime.now(timezone.utc).isoformat()
    raw = f"{timestamp}-{uuid.uuid4()}"
    return generate_hash(raw)[:ORDER_CODE_HASH_LENGTH]

class Order(SQLModel, table=True):
    __tablename__ = "tb_order"

    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(default_factory=generate_order_code, index=True, unique=True)

    user_id: int = Field(foreign_key="tb_user.id", index=True)
    user: Optional["User"] = Relationship(back_populates="orders")

    # Snapshots gravados no momento do checkout
    items: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    customer: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    delivery_type: DeliveryType = Field(sa_column=Column(Enum(DeliveryType), nullable=False))
    payment_method: PaymentMethod = Field(sa_column=Column(Enum(PaymentMethod), nullable=False))
    change: Optional[float] = Field(default=None, description="Troco para quanto (pagamento em dinheiro)")

    status: OrderStatus = Field(
        default=OrderStatus.RECEIVED,
        sa_column=Column(Enum(OrderStatus), nullable=False, index=True),
    )

    subtotal: float = Field(default=0.0)
    delivery_fee: float = Field(default=0.0)
    total: float = Field(default=0.0)

    billing_id: Optional[str] = Field(default=None, index=True)
    billing_url: Optional[str] = Field(default=None)

    estimated_delivery: Optional[datetime] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: Optional[datetime] = None
