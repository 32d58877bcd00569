from datetime import datetime, timezone
from typing import Optional
from sqlmodel import Field, SQLModel

class Review(SQLModel, table=True):
    __tablename__ = "tb_review"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, foreign_key="tb_user.id")
    customer_name: str
    rating: int = Field(ge=1, le=5)
    comment: str = Field(default="")

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
