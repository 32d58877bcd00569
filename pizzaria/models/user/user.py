from datetime import datetime, timezone
from typing import List, Optional, TYPE_CHECKING
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from pizzaria.models.user.role import UserRoleAssignment
    from pizzaria.models.order.order import Order

class User(SQLModel, table=True):
    __tablename__ = "tb_user"

    id: Optional[int] = Field(default=None, primary_key=True)

    name: str
    email: str = Field(index=True, unique=True)
    password_hash: str
    phone: Optional[str] = Field(default=None)

    # Endereço do perfil (reaproveitado no checkout)
    street: Optional[str] = None
    number: Optional[str] = None
    complement: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    cep: Optional[str] = None

    is_active: bool = Field(default=True)
    last_login: Optional[datetime] = None

    roles: List["UserRoleAssignment"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    orders: List["Order"] = Relationship(back_populates="user")

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: Optional[datetime] = Field(default=None)

    @property
    def role_names(self) -> List[str]:
        return sorted(r.role.value for r in self.roles)

    @property
    def is_employee(self) -> bool:
        return any(r in ("employee", "admin") for r in self.role_names)

    @property
    def is_admin(self) -> bool:
        return "admin" in self.role_names

    @property
    def has_address(self) -> bool:
        return bool(self.street and self.number and self.neighborhood and self.cep)
