from datetime import datetime, timedelta, timezone
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from pizzaria.configuration.settings import Configuration
from pizzaria.core.exceptions.app_exception import AppHttpException
from pizzaria.core.middlewares.users import get_current_user, require_employee
from pizzaria.database.connection import get_session
from pizzaria.enums.cart import CartStatus
from pizzaria.enums.delivery_type import DeliveryType
from pizzaria.enums.order_status import OrderStatus
from pizzaria.enums.payment_method import PaymentMethod
from pizzaria.helpers.cart.pricing import price_line
from pizzaria.helpers.order.status_flow import InvalidStatusTransition, validate_transition
from pizzaria.helpers.order.ticket import build_order_ticket
from pizzaria.integration.abacatepay import AbacatePayClient, get_abacatepay_client
from pizzaria.models.cart.cart import Cart
from pizzaria.models.order.order import Order
from pizzaria.models.user.user import User
from pizzaria.routes.company.restaurant import get_restaurant_settings
from pizzaria.schemas.order.order import (
    CheckoutRequest, CheckoutResponse, DeliveryAddress, OrderRead, StatusUpdateRequest,
)
from pizzaria.schemas.user.user import normalize_cep
from pizzaria.tasks.websockets.notifications import notify_new_order, notify_order_status

configuration = Configuration()
db_session = get_session


class OrderRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.tags = ["orders"]

        self.add_api_route("/orders/checkout", self.checkout, methods=["POST"], response_model=CheckoutResponse,
                           status_code=status.HTTP_201_CREATED)
        self.add_api_route("/orders/mine", self.list_my_orders, methods=["GET"], response_model=List[OrderRead])
        self.add_api_route("/orders/{order_id}", self.get_order_by_id, methods=["GET"], response_model=OrderRead)
        self.add_api_route("/orders/{order_id}/status", self.update_order_status_by_id, methods=["PATCH"],
                           response_model=OrderRead)
        self.add_api_route("/orders/{order_id}/print", self.print_order_by_id, methods=["GET"],
                           response_class=PlainTextResponse)

    # --- CHECKOUT ---

    def _resolve_address(self, data: CheckoutRequest, user: User) -> dict:
        address = data.address or DeliveryAddress()
        if not (address.street and address.number and address.neighborhood and address.cep):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Preencha todos os campos do endereço")

        try:
            cep = normalize_cep(address.cep)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        # Endereço usado fica salvo no perfil
        user.street = address.street
        user.number = address.number
        user.complement = address.complement or None
        user.neighborhood = address.neighborhood
        user.city = address.city
        user.cep = cep
        user.updated_at = datetime.now(timezone.utc)

        return {
            "street": address.street,
            "number": address.number,
            "complement": address.complement or "",
            "neighborhood": address.neighborhood,
            "city": address.city,
            "cep": cep,
        }

    def _get_checkout_cart(self, session: Session, cart_code: str, user: User) -> Cart:
        cart = session.exec(select(Cart).where(Cart.code == cart_code)).first()
        if not cart or (cart.user_id is not None and cart.user_id != user.id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Carrinho não encontrado")
        if cart.status != CartStatus.ACTIVE:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Carrinho não está mais ativo")
        if not cart.items:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Carrinho vazio")
        return cart

    async def checkout(
        self,
        data: CheckoutRequest,
        current_user: User = Depends(get_current_user),
        session: Session = Depends(db_session),
        abacatepay: AbacatePayClient = Depends(get_abacatepay_client),
    ):
        logging.info(f"PEDIDO >>> Checkout do carrinho {data.cart_code} por {current_user.id}")

        if not get_restaurant_settings(session).is_open:
            raise AppHttpException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A pizzaria está fechada no momento",
                solution="Tente novamente quando a loja estiver aberta.",
            )

        cart = self._get_checkout_cart(session, data.cart_code, current_user)

        address = None
        if data.delivery_type == DeliveryType.DELIVERY:
            address = self._resolve_address(data, current_user)

        if data.payment_method == PaymentMethod.PIX and data.payer is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Informe os dados do pagador para o PIX")

        # Recalcula as linhas com os preços atuais do cardápio
        try:
            lines = [price_line(session, item) for item in cart.items]
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        subtotal = round(sum(line.total_price for line in lines), 2)
        delivery_fee = configuration.delivery_fee if data.delivery_type == DeliveryType.DELIVERY else 0.0
        total = round(subtotal + delivery_fee, 2)

        change = None
        if data.payment_method == PaymentMethod.CASH:
            if data.change is None:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Informe o valor para troco")
            if data.change < total:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"O valor para troco deve ser de pelo menos {total:.2f}",
                )
            change = data.change

        minutes = (
            configuration.estimated_delivery_minutes
            if data.delivery_type == DeliveryType.DELIVERY
            else configuration.estimated_pickup_minutes
        )
        now = datetime.now(timezone.utc)

        order = Order(
            user_id=current_user.id,
            items=[line.snapshot() for line in lines],
            customer={
                "name": current_user.name,
                "email": current_user.email,
                "phone": current_user.phone,
                "address": address,
            },
            delivery_type=data.delivery_type,
            payment_method=data.payment_method,
            change=change,
            status=OrderStatus.AWAITING_PAYMENT if data.payment_method == PaymentMethod.PIX else OrderStatus.RECEIVED,
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total=total,
            estimated_delivery=now + timedelta(minutes=minutes),
            created_at=now,
        )
        session.add(current_user)
        session.add(order)
        try:
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logging.error(f"PEDIDO >>> Erro ao gravar pedido do carrinho {data.cart_code}: {e}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro ao registrar o pedido")
        session.refresh(order)

        pix = None
        if data.payment_method == PaymentMethod.PIX:
            payer = data.payer
            try:
                billing = await run_in_threadpool(
                    abacatepay.create_billing,
                    order_id=order.id,
                    order_code=order.code,
                    amount=order.total,
                    customer={
                        "name": payer.name,
                        "cellphone": payer.phone,
                        "email": payer.email,
                        "taxId": payer.cpf,
                    },
                )
            except Exception as e:
                logging.error(f"PEDIDO >>> Falha ao gerar PIX do pedido {order.id}, pedido removido: {e}")
                session.delete(order)
                session.commit()
                raise AppHttpException(
                    status_code=status.HTTP_502_BAD_GATEWAY,
                    detail=f"Erro ao gerar cobrança PIX: {e}",
                    solution="Tente novamente ou escolha outra forma de pagamento.",
                )

            order.billing_id = billing.id
            order.billing_url = billing.url
            pix = {"billing_id": billing.id, "url": billing.url, "status": billing.status}

        cart.status = CartStatus.COMPLETED
        cart.user_id = current_user.id
        cart.updated_at = datetime.now(timezone.utc)
        session.add(cart)
        session.add(order)
        session.commit()
        session.refresh(order)

        logging.info(f"PEDIDO >>> Pedido {order.id} ({order.code}) criado: {order.status.value}, total {order.total}")
        await notify_new_order(order)

        return CheckoutResponse(order=OrderRead.model_validate(order), pix=pix)

    # --- CONSULTAS ---

    def list_my_orders(self, current_user: User = Depends(get_current_user), session: Session = Depends(db_session)):
        return session.exec(
            select(Order).where(Order.user_id == current_user.id).order_by(Order.created_at.desc(), Order.id.desc())
        ).all()

    def _get_order_or_404(self, session: Session, order_id: int) -> Order:
        order = session.get(Order, order_id)
        if not order:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pedido não encontrado")
        return order

    def get_order_by_id(
        self,
        order_id: int,
        current_user: User = Depends(get_current_user),
        session: Session = Depends(db_session),
    ):
        order = self._get_order_or_404(session, order_id)
        if order.user_id != current_user.id and not current_user.is_employee:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Acesso negado")
        return order

    # --- EQUIPE ---

    async def update_order_status_by_id(
        self,
        order_id: int,
        data: StatusUpdateRequest,
        current_user: User = Depends(require_employee),
        session: Session = Depends(db_session),
    ):
        order = self._get_order_or_404(session, order_id)

        try:
            validate_transition(order.delivery_type, order.status, data.status)
        except InvalidStatusTransition as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        previous = order.status
        order.status = data.status
        order.updated_at = datetime.now(timezone.utc)
        session.add(order)
        session.commit()
        session.refresh(order)

        logging.info(f"PEDIDO >>> Pedido {order.id}: {previous.value} -> {order.status.value} por {current_user.id}")
        await notify_order_status(order)
        return order

    def print_order_by_id(
        self,
        order_id: int,
        current_user: User = Depends(require_employee),
        session: Session = Depends(db_session),
    ):
        order = self._get_order_or_404(session, order_id)
        return build_order_ticket(order)
