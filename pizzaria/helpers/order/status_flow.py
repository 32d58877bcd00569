from typing import Iterable, List, Tuple

from pizzaria.enums.delivery_type import DeliveryType
from pizzaria.enums.order_status import OrderStatus

ORDER_STATUS_PT = {
    OrderStatus.AWAITING_PAYMENT: "Aguardando Pagamento",
    OrderStatus.RECEIVED: "Pedido Recebido",
    OrderStatus.PREPARING: "Em Preparo",
    OrderStatus.READY_FOR_PICKUP: "Pronto para Retirada",
    OrderStatus.OUT_FOR_DELIVERY: "Saiu para Entrega",
    OrderStatus.DELIVERED: "Entregue",
}

PICKUP_FLOW = [
    OrderStatus.AWAITING_PAYMENT,
    OrderStatus.RECEIVED,
    OrderStatus.PREPARING,
    OrderStatus.READY_FOR_PICKUP,
]

DELIVERY_FLOW = [
    OrderStatus.AWAITING_PAYMENT,
    OrderStatus.RECEIVED,
    OrderStatus.PREPARING,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
]


class InvalidStatusTransition(ValueError):
    pass


def flow_for(delivery_type: DeliveryType) -> List[OrderStatus]:
    return PICKUP_FLOW if delivery_type == DeliveryType.PICKUP else DELIVERY_FLOW


def staff_status_options(delivery_type: DeliveryType) -> List[OrderStatus]:
    """Status que a equipe pode escolher para o pedido (nunca aguardando pagamento)."""
    return [s for s in flow_for(delivery_type) if s != OrderStatus.AWAITING_PAYMENT]


def validate_transition(delivery_type: DeliveryType, current: OrderStatus, target: OrderStatus) -> None:
    """
    Garante que o novo status pertence ao fluxo do tipo de entrega e não
    volta etapas. Repetir o status atual é aceito.
    """
    options = staff_status_options(delivery_type)
    if target not in options:
        raise InvalidStatusTransition(
            f"Status '{target.value}' não se aplica a pedidos do tipo '{delivery_type.value}'"
        )

    flow = flow_for(delivery_type)
    if flow.index(target) < flow.index(current):
        raise InvalidStatusTransition(
            f"Não é possível voltar de '{current.value}' para '{target.value}'"
        )


def is_completed(delivery_type: DeliveryType, status: OrderStatus) -> bool:
    return status == flow_for(delivery_type)[-1]


def split_active_completed(orders: Iterable) -> Tuple[list, list]:
    active, completed = [], []
    for order in orders:
        if is_completed(order.delivery_type, order.status):
            completed.append(order)
        else:
            active.append(order)
    return active, completed
