from typing import Optional, List
from datetime import datetime, timezone
import uuid
from sqlalchemy import Column, Enum
from sqlmodel import SQLModel, Field, Relationship

from pizzaria.core.utils.hash_utils import generate_hash
from pizzaria.enums.cart import CartStatus

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from pizzaria.models.cart.cart_item import CartItem

CART_CODE_HASH_LENGTH = 10

def generate_cart_code() -> str:
    timestamp = datetime.now(timezone.utc).isoformat()
    raw = f"{timestamp}-{uuid.uuid4()}"
    return generate_hash(raw)[:CART_CODE_HASH_LENGTH]

class Cart(SQLModel, table=True):
    __tablename__ = "tb_cart"

    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(default_factory=generate_cart_code, index=True, unique=True)
    user_id: Optional[int] = Field(default=None, foreign_key="tb_user.id")

    status: CartStatus = Field(default=CartStatus.ACTIVE, sa_column=Column(Enum(CartStatus), nullable=False))

    items: List["CartItem"] = Relationship(
        back_populates="cart",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "CartItem.id"},
    )

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def subtotal(self) -> float:
        return round(sum(item.total_price for item in self.items or []), 2)

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items or [])
