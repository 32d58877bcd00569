from datetime import datetime, timezone
from typing import Optional
from sqlmodel import Field, SQLModel

class Crust(SQLModel, table=True):
    """Borda recheada."""
    __tablename__ = "tb_crust"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    price: float = Field(default=0.0, ge=0)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: Optional[datetime] = Field(default=None)


class Addon(SQLModel, table=True):
    """Adicional da pizza."""
    __tablename__ = "tb_addon"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    price: float = Field(default=0.0, ge=0)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: Optional[datetime] = Field(default=None)
