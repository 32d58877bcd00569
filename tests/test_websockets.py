import pytest
from fastapi import WebSocketDisconnect

from conftest import ADDRESS


def test_restaurant_channel_receives_changes(client, employee_headers):
    with client.websocket_connect("/ws/restaurant") as ws:
        client.post("/restaurant/status/toggle", headers=employee_headers)
        message = ws.receive_json()

    assert message == {"type": "restaurant_status", "is_open": False}


def test_staff_feed_requires_staff_token(client, customer_headers):
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/ws/orders") as ws:
            ws.receive_json()

    token = customer_headers["Authorization"].split()[1]
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect(f"/ws/orders?token={token}") as ws:
            ws.receive_json()


def test_staff_feed_and_tracking(client, customer_headers, employee_headers, make_cart, pizza_line, abacatepay):
    token = employee_headers["Authorization"].split()[1]
    code = make_cart(pizza_line())

    with client.websocket_connect(f"/ws/orders?token={token}") as staff:
        response = client.post("/orders/checkout", headers=customer_headers, json={
            "cart_code": code,
            "delivery_type": "delivery",
            "payment_method": "credito",
            "address": ADDRESS,
        })
        order = response.json()["order"]

        new_order = staff.receive_json()
        assert new_order["type"] == "new_order"
        assert new_order["order"]["id"] == order["id"]

        with client.websocket_connect(f"/ws/orders/{order['id']}") as tracking:
            client.patch(f"/orders/{order['id']}/status", headers=employee_headers, json={"status": "em_preparo"})

            updated = staff.receive_json()
            assert updated["type"] == "order_updated"
            assert updated["order"]["status"] == "em_preparo"

            assert tracking.receive_json() == {"type": "order_status", "order_id": order["id"], "status": "em_preparo"}
