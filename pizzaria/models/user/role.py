from datetime import datetime, timezone
from typing import Optional, TYPE_CHECKING
from sqlalchemy import Column, Enum, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from pizzaria.enums.user_role import UserRole

if TYPE_CHECKING:
    from pizzaria.models.user.user import User

class UserRoleAssignment(SQLModel, table=True):
    __tablename__ = "tb_user_role"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_role"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="tb_user.id", index=True)
    role: UserRole = Field(sa_column=Column(Enum(UserRole), nullable=False))

    user: Optional["User"] = Relationship(back_populates="roles")

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
