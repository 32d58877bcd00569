from datetime import datetime, timezone
from typing import Optional
from sqlmodel import Field, SQLModel

class Beverage(SQLModel, table=True):
    __tablename__ = "tb_beverage"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    description: Optional[str] = None
    image: Optional[str] = None
    price: float = Field(default=0.0, ge=0)
    size: Optional[str] = Field(default=None, description="Ex.: 350ml, 2L")

    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: Optional[datetime] = Field(default=None)
