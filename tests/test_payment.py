from conftest import PAYER


def pix_order(client, headers, code):
    response = client.post("/orders/checkout", headers=headers, json={
        "cart_code": code,
        "delivery_type": "retirada",
        "payment_method": "pix",
        "payer": PAYER,
    })
    assert response.status_code == 201, response.text
    return response.json()["order"]


def order_status(client, headers, order_id):
    return client.get(f"/orders/{order_id}", headers=headers).json()["status"]


def test_check_requires_billing_id(client, abacatepay):
    response = client.post("/payment/pix/check", json={})
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Billing ID required"}


def test_check_pending_payment(client, customer_headers, make_cart, pizza_line, abacatepay):
    order = pix_order(client, customer_headers, make_cart(pizza_line()))

    response = client.post("/payment/pix/check", json={"billingId": order["billing_id"]})
    assert response.status_code == 200
    assert response.json() == {"success": True, "status": "PENDING", "is_paid": False}
    assert order_status(client, customer_headers, order["id"]) == "aguardando_pagamento"


def test_check_paid_moves_order_once(client, customer_headers, employee_headers, make_cart, pizza_line, abacatepay):
    order = pix_order(client, customer_headers, make_cart(pizza_line()))
    abacatepay.pay(order["billing_id"], "COMPLETED")

    response = client.post("/payment/pix/check", json={"billing_id": order["billing_id"]})
    assert response.json() == {"success": True, "status": "COMPLETED", "is_paid": True}
    assert order_status(client, customer_headers, order["id"]) == "recebido"

    # Uma confirmação atrasada não volta o pedido que já andou
    client.patch(f"/orders/{order['id']}/status", headers=employee_headers, json={"status": "em_preparo"})
    client.post("/payment/pix/check", json={"billing_id": order["billing_id"]})
    client.post("/payment/webhook/abacatepay", json={"data": {"billing": {"id": order["billing_id"], "status": "PAID"}}})
    assert order_status(client, customer_headers, order["id"]) == "em_preparo"


def test_check_provider_failure(client, abacatepay):
    abacatepay.fail_status = True
    response = client.post("/payment/pix/check", json={"billing_id": "bill_x"})
    assert response.status_code == 502
    assert response.json()["success"] is False


def test_webhook_without_billing_id(client):
    response = client.post("/payment/webhook/abacatepay", json={"event": "ping"})
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "No billing ID"}


def test_webhook_paid_confirms_order(client, customer_headers, make_cart, pizza_line, abacatepay):
    order = pix_order(client, customer_headers, make_cart(pizza_line()))

    response = client.post("/payment/webhook/abacatepay", json={
        "event": "billing.paid",
        "data": {"billing": {"id": order["billing_id"], "status": "PAID"}},
    })
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert order_status(client, customer_headers, order["id"]) == "recebido"


def test_webhook_accepts_flat_payloads(client, customer_headers, make_cart, pizza_line, abacatepay):
    first = pix_order(client, customer_headers, make_cart(pizza_line()))
    second = pix_order(client, customer_headers, make_cart(pizza_line()))

    client.post("/payment/webhook/abacatepay", json={"billing": {"id": first["billing_id"], "status": "PAID"}})
    client.post("/payment/webhook/abacatepay", json={"id": second["billing_id"], "status": "COMPLETED"})

    assert order_status(client, customer_headers, first["id"]) == "recebido"
    assert order_status(client, customer_headers, second["id"]) == "recebido"


def test_webhook_other_status_is_acknowledged(client, customer_headers, make_cart, pizza_line, abacatepay):
    order = pix_order(client, customer_headers, make_cart(pizza_line()))
    response = client.post("/payment/webhook/abacatepay", json={"id": order["billing_id"], "status": "EXPIRED"})
    assert response.status_code == 200
    assert order_status(client, customer_headers, order["id"]) == "aguardando_pagamento"


def test_webhook_unknown_billing(client):
    response = client.post("/payment/webhook/abacatepay", json={"id": "bill_desconhecido", "status": "PAID"})
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Order not found"}


def test_webhook_secret(client, monkeypatch):
    from pizzaria.routes.payment import payment

    monkeypatch.setattr(payment.configuration, "abacatepay_webhook_secret", "s3gredo")
    payload = {"event": "ping"}

    assert client.post("/payment/webhook/abacatepay", json=payload).status_code == 401
    assert client.post("/payment/webhook/abacatepay?webhookSecret=errado", json=payload).status_code == 401
    assert client.post("/payment/webhook/abacatepay?webhookSecret=s3gredo", json=payload).status_code == 200


def test_payment_database_errors_answer_json(client, abacatepay, monkeypatch):
    from pizzaria.routes.payment import payment

    def broken_lookup(session, billing_id):
        raise RuntimeError("banco indisponível")

    monkeypatch.setattr(payment, "find_order_by_billing", broken_lookup)
    monkeypatch.setattr(payment, "confirm_pix_payment", broken_lookup)
    abacatepay.pay("bill_qualquer")

    webhook = client.post("/payment/webhook/abacatepay", json={"id": "bill_qualquer", "status": "PAID"})
    assert webhook.status_code == 500
    assert webhook.json() == {"success": False, "error": "banco indisponível"}

    check = client.post("/payment/pix/check", json={"billingId": "bill_qualquer"})
    assert check.status_code == 500
    assert check.json() == {"success": False, "error": "banco indisponível"}
