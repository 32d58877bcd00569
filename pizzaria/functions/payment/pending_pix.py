from datetime import timedelta
import logging
from typing import List, Optional

from sqlmodel import select

from pizzaria.configuration.settings import Configuration
from pizzaria.core.utils.datetime_utils import utcnow
from pizzaria.database.connection import session_scope
from pizzaria.enums.billing_status import is_paid_status
from pizzaria.enums.order_status import OrderStatus
from pizzaria.helpers.payment.reconcile import confirm_pix_payment
from pizzaria.integration.abacatepay import AbacatePayClient, AbacatePayError, get_abacatepay_client
from pizzaria.models.order.order import Order
from pizzaria.schemas.order.order import OrderRead
from pizzaria.tasks.websockets.notifications import dispatch_order_status

configuration = Configuration()


def reconcile_pending_pix(client: Optional[AbacatePayClient] = None) -> int:
    """
    Consulta na AbacatePay as cobranças de pedidos ainda aguardando pagamento
    dentro da janela configurada e confirma as que já foram pagas.
    Cobre os casos em que o webhook não chega e o cliente fechou a página;
    cada confirmação é avisada nos canais de acompanhamento e da equipe.
    """
    client = client or get_abacatepay_client()
    window_start = utcnow() - timedelta(minutes=configuration.pix_reconcile_window_minutes)
    confirmed: List[OrderRead] = []

    with session_scope() as session:
        billing_ids = session.exec(
            select(Order.billing_id).where(
                Order.status == OrderStatus.AWAITING_PAYMENT,
                Order.billing_id.is_not(None),
                Order.created_at >= window_start,
            )
        ).all()

        for billing_id in billing_ids:
            try:
                billing_status = client.get_billing_status(billing_id)
            except AbacatePayError as e:
                logging.warning(f"PAGAMENTO >>> Não foi possível consultar a cobrança {billing_id}: {e}")
                continue

            if is_paid_status(billing_status):
                order, transitioned = confirm_pix_payment(session, billing_id)
                if order is not None and transitioned:
                    # Snapshot ainda com a sessão aberta
                    confirmed.append(OrderRead.model_validate(order))

    if billing_ids:
        logging.info(f"PAGAMENTO >>> Varredura PIX: {len(billing_ids)} pendentes, {len(confirmed)} confirmados")
    dispatch_order_status(confirmed)
    return len(confirmed)
