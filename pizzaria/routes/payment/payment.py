import logging
from typing import Any, Optional, Tuple

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from sqlmodel import Session

from pizzaria.configuration.settings import Configuration
from pizzaria.database.connection import get_session
from pizzaria.enums.billing_status import is_paid_status
from pizzaria.helpers.payment.reconcile import confirm_pix_payment, find_order_by_billing
from pizzaria.integration.abacatepay import AbacatePayClient, AbacatePayError, get_abacatepay_client
from pizzaria.schemas.payment.payment import CheckPixRequest, CheckPixResponse
from pizzaria.tasks.websockets.notifications import notify_order_status

configuration = Configuration()
db_session = get_session


def _failure(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


def extract_billing(payload: Any) -> Tuple[Optional[str], Optional[str]]:
    """Lê id e status da cobrança nos formatos de callback aceitos pela AbacatePay."""
    if not isinstance(payload, dict):
        return None, None

    data = payload.get("data") if isinstance(payload.get("data"), dict) else {}
    candidates = [data.get("billing"), payload.get("billing"), payload]

    billing_id = next((c.get("id") for c in candidates if isinstance(c, dict) and c.get("id")), None)
    billing_status = next((c.get("status") for c in candidates if isinstance(c, dict) and c.get("status")), None)
    return billing_id, billing_status


class PaymentRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.prefix = "/payment"
        self.tags = ["payment"]

        self.add_api_route("/pix/check", self.check_pix_payment, methods=["POST"], response_model=CheckPixResponse)
        self.add_api_route("/webhook/abacatepay", self.handle_webhook, methods=["POST"])

    async def check_pix_payment(
        self,
        data: CheckPixRequest,
        session: Session = Depends(db_session),
        abacatepay: AbacatePayClient = Depends(get_abacatepay_client),
    ):
        if not data.billing_id:
            return _failure(status.HTTP_400_BAD_REQUEST, "Billing ID required")

        try:
            try:
                billing_status = await run_in_threadpool(abacatepay.get_billing_status, data.billing_id)
            except AbacatePayError as e:
                logging.error(f"PAGAMENTO >>> Erro ao consultar cobrança {data.billing_id}: {e}")
                return _failure(status.HTTP_502_BAD_GATEWAY, str(e))

            is_paid = is_paid_status(billing_status)
            if is_paid:
                order, transitioned = confirm_pix_payment(session, data.billing_id)
                if order is not None and transitioned:
                    await notify_order_status(order)

            return CheckPixResponse(success=True, status=billing_status, is_paid=is_paid)

        except Exception as e:
            session.rollback()
            logging.error(f"PAGAMENTO >>> Erro ao verificar cobrança {data.billing_id}: {e}")
            return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    async def handle_webhook(self, request: Request, session: Session = Depends(db_session)):
        secret = configuration.abacatepay_webhook_secret
        if secret and request.query_params.get("webhookSecret") != secret:
            logging.warning("PAGAMENTO >>> Webhook recusado: segredo inválido")
            return _failure(status.HTTP_401_UNAUTHORIZED, "Invalid webhook secret")

        try:
            payload = await request.json()
        except ValueError:
            return _failure(status.HTTP_400_BAD_REQUEST, "Invalid JSON payload")

        try:
            logging.info(f"PAGAMENTO >>> Webhook AbacatePay recebido: {payload}")
            billing_id, billing_status = extract_billing(payload)

            if not billing_id:
                logging.info("PAGAMENTO >>> Webhook sem id de cobrança")
                return {"success": True, "message": "No billing ID"}

            if is_paid_status(billing_status):
                if find_order_by_billing(session, billing_id) is None:
                    logging.warning(f"PAGAMENTO >>> Nenhum pedido para a cobrança {billing_id}")
                    return _failure(status.HTTP_404_NOT_FOUND, "Order not found")

                order, transitioned = confirm_pix_payment(session, billing_id)
                if order is not None and transitioned:
                    await notify_order_status(order)

            return {"success": True}

        except Exception as e:
            session.rollback()
            logging.error(f"PAGAMENTO >>> Erro ao processar webhook: {e}")
            return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
