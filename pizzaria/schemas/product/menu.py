from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from pizzaria.enums.product_size import PizzaCategory, PizzaSize


def _validate_prices(v: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
    if v is None:
        return v
    valid_sizes = {s.value for s in PizzaSize}
    for size, price in v.items():
        if size not in valid_sizes:
            raise ValueError(f"Tamanho inválido: {size}")
        if price < 0:
            raise ValueError("Preço não pode ser negativo")
    return v


# --- PIZZA ---
class PizzaBase(BaseModel):
    name: str = Field(..., max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    image: Optional[str] = None
    prices: Dict[str, float]
    category: PizzaCategory = PizzaCategory.TRADICIONAL
    is_active: bool = True

    @field_validator("prices")
    @classmethod
    def validate_prices(cls, v):
        if not v:
            raise ValueError("Informe o preço de pelo menos um tamanho")
        return _validate_prices(v)

class PizzaCreate(PizzaBase):
    pass

class PizzaUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    image: Optional[str] = None
    prices: Optional[Dict[str, float]] = None
    category: Optional[PizzaCategory] = None
    is_active: Optional[bool] = None

    @field_validator("prices")
    @classmethod
    def validate_prices(cls, v):
        return _validate_prices(v)

class PizzaRead(PizzaBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# --- BEBIDA / SOBREMESA ---
class SimpleProductBase(BaseModel):
    name: str = Field(..., max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    image: Optional[str] = None
    price: float = Field(..., ge=0)
    is_active: bool = True

class BeverageCreate(SimpleProductBase):
    size: Optional[str] = None

class BeverageUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    image: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    size: Optional[str] = None
    is_active: Optional[bool] = None

class BeverageRead(BeverageCreate):
    id: int

    class Config:
        from_attributes = True

class DessertCreate(SimpleProductBase):
    pass

class DessertUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    image: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    is_active: Optional[bool] = None

class DessertRead(DessertCreate):
    id: int

    class Config:
        from_attributes = True


# --- BORDA / ADICIONAL ---
class ExtraCreate(BaseModel):
    name: str = Field(..., max_length=255)
    price: float = Field(..., ge=0)
    is_active: bool = True

class ExtraUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    price: Optional[float] = Field(None, ge=0)
    is_active: Optional[bool] = None

class ExtraRead(ExtraCreate):
    id: int

    class Config:
        from_attributes = True


class MenuResponse(BaseModel):
    pizzas: List[PizzaRead]
    beverages: List[BeverageRead]
    desserts: List[DessertRead]
    crusts: List[ExtraRead]
    addons: List[ExtraRead]
    sizes: Dict[str, str]
