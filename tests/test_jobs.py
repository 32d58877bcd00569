from datetime import datetime, timedelta, timezone

from sqlmodel import Session, select

from pizzaria.database.connection import engine
from pizzaria.enums.cart import CartStatus
from pizzaria.enums.order_status import OrderStatus
from pizzaria.functions.cart.cart_jobs import delete_expired_carts, expire_old_carts
from pizzaria.functions.payment.pending_pix import reconcile_pending_pix
from pizzaria.models.cart.cart import Cart
from pizzaria.models.order.order import Order

from conftest import PAYER


def _age_cart(code, days, status=None):
    with Session(engine) as session:
        cart = session.exec(select(Cart).where(Cart.code == code)).one()
        cart.updated_at = datetime.now(timezone.utc) - timedelta(days=days)
        if status:
            cart.status = status
        session.add(cart)
        session.commit()


def _cart(code):
    with Session(engine) as session:
        return session.exec(select(Cart).where(Cart.code == code)).first()


def test_expire_and_delete_old_carts(client, make_cart):
    stale = make_cart()
    fresh = make_cart()
    _age_cart(stale, days=8)

    assert expire_old_carts() >= 1
    assert _cart(stale).status == CartStatus.EXPIRED
    assert _cart(fresh).status == CartStatus.ACTIVE

    _age_cart(stale, days=31)
    assert delete_expired_carts() >= 1
    assert _cart(stale) is None
    assert _cart(fresh) is not None


def test_reconcile_pending_pix(client, customer_headers, make_cart, pizza_line, abacatepay):
    orders = []
    for _ in range(2):
        response = client.post("/orders/checkout", headers=customer_headers, json={
            "cart_code": make_cart(pizza_line()),
            "delivery_type": "retirada",
            "payment_method": "pix",
            "payer": PAYER,
        })
        orders.append(response.json()["order"])

    paid, unpaid = orders
    abacatepay.pay(paid["billing_id"])

    assert reconcile_pending_pix(abacatepay) == 1
    # Rodar de novo não confirma duas vezes
    assert reconcile_pending_pix(abacatepay) == 0

    with Session(engine) as session:
        assert session.get(Order, paid["id"]).status == OrderStatus.RECEIVED
        assert session.get(Order, unpaid["id"]).status == OrderStatus.AWAITING_PAYMENT


def test_reconcile_ignores_orders_outside_window(client, customer_headers, make_cart, pizza_line, abacatepay):
    response = client.post("/orders/checkout", headers=customer_headers, json={
        "cart_code": make_cart(pizza_line()),
        "delivery_type": "retirada",
        "payment_method": "pix",
        "payer": PAYER,
    })
    order = response.json()["order"]

    with Session(engine) as session:
        db_order = session.get(Order, order["id"])
        db_order.created_at = datetime.now(timezone.utc) - timedelta(days=1)
        session.add(db_order)
        session.commit()

    abacatepay.pay(order["billing_id"])
    reconcile_pending_pix(abacatepay)

    with Session(engine) as session:
        assert session.get(Order, order["id"]).status == OrderStatus.AWAITING_PAYMENT


def test_reconcile_survives_provider_errors(client, abacatepay):
    abacatepay.fail_status = True
    assert reconcile_pending_pix(abacatepay) == 0


def test_reconcile_notifies_tracking_channel(client, customer_headers, employee_headers, make_cart, pizza_line, abacatepay):
    response = client.post("/orders/checkout", headers=customer_headers, json={
        "cart_code": make_cart(pizza_line()),
        "delivery_type": "retirada",
        "payment_method": "pix",
        "payer": PAYER,
    })
    order = response.json()["order"]
    token = employee_headers["Authorization"].split()[1]

    with client.websocket_connect(f"/ws/orders?token={token}") as staff:
        with client.websocket_connect(f"/ws/orders/{order['id']}") as tracking:
            abacatepay.pay(order["billing_id"])
            assert reconcile_pending_pix(abacatepay) == 1

            assert tracking.receive_json() == {"type": "order_status", "order_id": order["id"], "status": "recebido"}

        updated = staff.receive_json()
        assert updated["type"] == "order_updated"
        assert updated["order"]["id"] == order["id"]
        assert updated["order"]["status"] == "recebido"
