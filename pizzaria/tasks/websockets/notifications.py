# pizzaria/tasks/websockets/notifications.py
import asyncio
from concurrent.futures import Future
import logging
from typing import Iterable, List, Optional

from pizzaria.models.order.order import Order
from pizzaria.schemas.order.order import OrderRead
from pizzaria.tasks.websockets.ws_manager import order_ws_manager, restaurant_ws_manager

STAFF_CHANNEL = "staff"

# Loop da aplicação, usado pelos jobs que rodam em threads do agendador
_event_loop: Optional[asyncio.AbstractEventLoop] = None


def tracking_channel(order_id: int) -> str:
    return f"order:{order_id}"


def bind_event_loop(loop: Optional[asyncio.AbstractEventLoop]):
    global _event_loop
    _event_loop = loop


async def notify_new_order(order: Order):
    await order_ws_manager.broadcast(
        {"type": "new_order", "order": OrderRead.model_validate(order).model_dump(mode="json")},
        channel=STAFF_CHANNEL,
    )
    await notify_order_status(order, staff=False)


async def notify_order_status(order, staff: bool = True):
    """Aceita o modelo do banco ou um `OrderRead` já montado."""
    order = OrderRead.model_validate(order)
    if staff:
        await order_ws_manager.broadcast(
            {"type": "order_updated", "order": order.model_dump(mode="json")},
            channel=STAFF_CHANNEL,
        )
    await order_ws_manager.broadcast(
        {"type": "order_status", "order_id": order.id, "status": order.status.value},
        channel=tracking_channel(order.id),
    )


def dispatch_order_status(orders: Iterable[OrderRead]) -> List[Future]:
    """Agenda `notify_order_status` no loop da aplicação a partir de outra thread."""
    loop = _event_loop
    if loop is None or loop.is_closed():
        logging.warning("WEBSOCKET >>> Sem loop da aplicação, notificações de status descartadas")
        return []

    return [asyncio.run_coroutine_threadsafe(notify_order_status(order), loop) for order in orders]


async def notify_restaurant_status(is_open: bool):
    await restaurant_ws_manager.broadcast({"type": "restaurant_status", "is_open": is_open})
