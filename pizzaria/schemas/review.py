from datetime import datetime
from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(default="", max_length=1000)


class ReviewRead(BaseModel):
    id: int
    customer_name: str
    rating: int
    comment: str
    created_at: datetime

    class Config:
        from_attributes = True
