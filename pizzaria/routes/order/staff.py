from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from pizzaria.core.middlewares.users import require_employee
from pizzaria.database.connection import get_session
from pizzaria.enums.order_status import OrderStatus
from pizzaria.helpers.order.status_flow import split_active_completed
from pizzaria.models.order.order import Order
from pizzaria.models.user.user import User
from pizzaria.schemas.order.order import OrderRead, StaffOrdersResponse, StaffStats

db_session = get_session


class StaffRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.prefix = "/staff"
        self.tags = ["staff"]

        self.add_api_route("/orders", self.get_orders_panel, methods=["GET"], response_model=StaffOrdersResponse)

    def get_orders_panel(self, current_user: User = Depends(require_employee), session: Session = Depends(db_session)):
        orders = session.exec(select(Order).order_by(Order.created_at.desc(), Order.id.desc())).all()
        active, completed = split_active_completed(orders)

        def count(status: OrderStatus) -> int:
            return sum(1 for order in orders if order.status == status)

        return StaffOrdersResponse(
            active=[OrderRead.model_validate(o) for o in active],
            completed=[OrderRead.model_validate(o) for o in completed],
            stats=StaffStats(
                recebido=count(OrderStatus.RECEIVED),
                em_preparo=count(OrderStatus.PREPARING),
                saiu_entrega=count(OrderStatus.OUT_FOR_DELIVERY),
                total=len(orders),
            ),
        )
