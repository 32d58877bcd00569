from datetime import datetime
from pydantic import BaseModel


class RestaurantStatusResponse(BaseModel):
    is_open: bool
    updated_at: datetime
    message: str


class RestaurantStatusUpdate(BaseModel):
    is_open: bool
