from datetime import datetime, timezone
from typing import Optional
from sqlmodel import Field, SQLModel

class RestaurantSettings(SQLModel, table=True):
    __tablename__ = "tb_restaurant_settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(default="Pizzaria")
    is_open: bool = Field(default=True)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
