import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from sqlalchemy import update
from sqlmodel import Session, select

from pizzaria.enums.order_status import OrderStatus
from pizzaria.models.order.order import Order


def find_order_by_billing(session: Session, billing_id: str) -> Optional[Order]:
    return session.exec(select(Order).where(Order.billing_id == billing_id)).first()


def confirm_pix_payment(session: Session, billing_id: str) -> Tuple[Optional[Order], bool]:
    """
    Move o pedido da cobrança de `aguardando_pagamento` para `recebido`.

    A atualização é condicional no próprio UPDATE, então polling e webhook
    podem chegar juntos: só um deles efetiva a transição. Retorna o pedido
    (ou None) e se esta chamada fez a transição.
    """
    result = session.execute(
        update(Order)
        .where(Order.billing_id == billing_id, Order.status == OrderStatus.AWAITING_PAYMENT)
        .values(status=OrderStatus.RECEIVED, updated_at=datetime.now(timezone.utc))
    )
    session.commit()

    transitioned = result.rowcount > 0
    order = find_order_by_billing(session, billing_id)
    if order is not None:
        session.refresh(order)

    if transitioned:
        logging.info(f"PAGAMENTO >>> Pedido {order.id if order else '?'} pago via PIX (cobrança {billing_id}) -> recebido")
    return order, transitioned
