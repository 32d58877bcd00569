def test_status_is_public(client):
    response = client.get("/restaurant/status")
    assert response.status_code == 200
    assert response.json()["is_open"] is True
    assert response.json()["message"] == "Estamos abertos!"


def test_toggle_and_set(client, employee_headers):
    toggled = client.post("/restaurant/status/toggle", headers=employee_headers)
    assert toggled.status_code == 200
    assert toggled.json()["is_open"] is False
    assert client.get("/restaurant/status").json()["is_open"] is False

    reopened = client.put("/restaurant/status", headers=employee_headers, json={"is_open": True})
    assert reopened.json()["is_open"] is True

    # Definir o mesmo valor é aceito
    assert client.put("/restaurant/status", headers=employee_headers, json={"is_open": True}).json()["is_open"] is True


def test_only_staff_change_status(client, customer_headers):
    assert client.post("/restaurant/status/toggle").status_code == 401
    assert client.post("/restaurant/status/toggle", headers=customer_headers).status_code == 403
    assert client.put("/restaurant/status", headers=customer_headers, json={"is_open": False}).status_code == 403


def test_health(client):
    response = client.get("/restaurant/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
