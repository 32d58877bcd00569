from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, conint, model_validator

from pizzaria.enums.cart import CartItemKind, CartStatus
from pizzaria.enums.product_size import PizzaSize

MAX_ITEM_QUANTITY = 50


class CartItemCreate(BaseModel):
    """
    Linha do carrinho. O tipo da linha é definido pelo produto informado:
    exatamente um entre `pizza_id`, `beverage_id` e `dessert_id`.
    """
    pizza_id: Optional[int] = None
    beverage_id: Optional[int] = None
    dessert_id: Optional[int] = None

    size: Optional[PizzaSize] = None
    second_pizza_id: Optional[int] = None
    crust_id: Optional[int] = None
    addon_ids: List[int] = Field(default_factory=list)
    notes: str = Field(default="", max_length=255)

    quantity: conint(ge=1, le=MAX_ITEM_QUANTITY) = 1  # type: ignore

    @model_validator(mode="after")
    def validate_kind(self):
        present = [
            name for name in ("pizza_id", "beverage_id", "dessert_id")
            if getattr(self, name) is not None
        ]
        if len(present) != 1:
            raise ValueError("Informe exatamente um produto: pizza_id, beverage_id ou dessert_id")

        if self.pizza_id is None:
            if self.size or self.second_pizza_id or self.crust_id or self.addon_ids:
                raise ValueError("Tamanho, meia, borda e adicionais são exclusivos de pizzas")
        elif self.size is None:
            raise ValueError("Informe o tamanho da pizza")

        if self.second_pizza_id is not None and self.second_pizza_id == self.pizza_id:
            self.second_pizza_id = None
        return self

    @property
    def kind(self) -> CartItemKind:
        if self.pizza_id is not None:
            return CartItemKind.PIZZA
        if self.beverage_id is not None:
            return CartItemKind.BEVERAGE
        return CartItemKind.DESSERT


class CartItemUpdate(BaseModel):
    quantity: conint(ge=1, le=MAX_ITEM_QUANTITY)  # type: ignore
    notes: Optional[str] = Field(default=None, max_length=255)


class CartItemRead(BaseModel):
    id: int
    kind: CartItemKind
    name: str
    description: str
    pizza_id: Optional[int] = None
    second_pizza_id: Optional[int] = None
    size: Optional[str] = None
    crust_id: Optional[int] = None
    addon_ids: List[int] = []
    beverage_id: Optional[int] = None
    dessert_id: Optional[int] = None
    notes: str = ""
    quantity: int
    unit_price: float
    total_price: float

    class Config:
        from_attributes = True


class CartRead(BaseModel):
    id: int
    code: str
    status: CartStatus
    items: List[CartItemRead] = []
    subtotal: float
    total_items: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
