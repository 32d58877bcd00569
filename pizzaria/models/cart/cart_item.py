from typing import List, Optional
from datetime import datetime, timezone
from sqlalchemy import Column, Enum, JSON
from sqlmodel import SQLModel, Field, Relationship

from pizzaria.enums.cart import CartItemKind

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from pizzaria.models.cart.cart import Cart

class CartItem(SQLModel, table=True):
    __tablename__ = "tb_cart_item"

    id: Optional[int] = Field(default=None, primary_key=True)
    cart_id: int = Field(foreign_key="tb_cart.id", index=True)

    kind: CartItemKind = Field(sa_column=Column(Enum(CartItemKind), nullable=False))

    # Linha de pizza
    pizza_id: Optional[int] = Field(default=None, foreign_key="tb_pizza.id")
    second_pizza_id: Optional[int] = Field(default=None, foreign_key="tb_pizza.id")
    size: Optional[str] = Field(default=None)
    crust_id: Optional[int] = Field(default=None, foreign_key="tb_crust.id")
    addon_ids: List[int] = Field(default_factory=list, sa_column=Column(JSON))

    # Linha de bebida / sobremesa
    beverage_id: Optional[int] = Field(default=None, foreign_key="tb_beverage.id")
    dessert_id: Optional[int] = Field(default=None, foreign_key="tb_dessert.id")

    # Descrição calculada ao adicionar (exibição)
    name: str = Field(default="")
    description: str = Field(default="")

    notes: str = Field(default="", max_length=255)
    quantity: int = Field(default=1, ge=1)
    unit_price: float = Field(default=0.0, ge=0)

    cart: Optional["Cart"] = Relationship(back_populates="items")

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: Optional[datetime] = None

    @property
    def total_price(self) -> float:
        return round(self.unit_price * self.quantity, 2)
