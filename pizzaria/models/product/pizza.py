from datetime import datetime, timezone
from typing import Dict, Optional
from sqlalchemy import Column, Enum, JSON
from sqlmodel import Field, SQLModel

from pizzaria.enums.product_size import PizzaCategory

class Pizza(SQLModel, table=True):
    __tablename__ = "tb_pizza"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    description: Optional[str] = None
    image: Optional[str] = None

    # {"pequena": 39.9, "media": 49.9, "grande": 59.9, "gigante": 69.9}
    prices: Dict[str, float] = Field(default_factory=dict, sa_column=Column(JSON))
    category: PizzaCategory = Field(
        default=PizzaCategory.TRADICIONAL,
        sa_column=Column(Enum(PizzaCategory), nullable=False),
    )

    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: Optional[datetime] = Field(default=None)

    def price_for(self, size: str) -> Optional[float]:
        return (self.prices or {}).get(size)
